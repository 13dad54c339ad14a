"""Constants and default values used across the application."""

# HTTP Constants
DEFAULT_HTML_TIMEOUT = 10.0  # Page fetch timeout in seconds (icon discovery, page title)
DEFAULT_ASSET_TIMEOUT = 15.0  # Icon and manifest download timeout in seconds
DEFAULT_MAX_REDIRECTS = 10  # Maximum number of redirect hops per request
BROWSER_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)
ASSET_USER_AGENT = "Mozilla/5.0 (compatible; WebNest/1.0)"

# Icon Discovery Constants
APPLE_TOUCH_ICON_BONUS = 1000  # Apple touch icons outrank any plain icon
FALLBACK_ICON_PATH = "/favicon.ico"

# Icon Conversion Constants
ICONSET_SIZES = [16, 32, 64, 128, 256, 512]
ICONSET_MAX_SIZE = 1024  # Largest @2x variant in a macOS iconset
ICO_SIZES = [256, 128, 64, 48, 32, 16]
SVG_RASTER_SIZE = 1024
TOOL_TIMEOUT = 60.0  # Seconds an external image tool may run

# Naming Constants
APP_ID_PREFIX = "com.webnest."
MAX_APP_NAME_LENGTH = 50
MAX_APP_ID_PATH_LENGTH = 20
ILLEGAL_FILENAME_CHARS = '<>:"/\\|?*'
DEFAULT_APP_NAME = "WebApp"
PAGE_TITLE_MAX_BYTES = 50_000  # Titles live near the top of the document

# Launcher Constants
MACOS_ICON_NAME = "AppIcon"
MACOS_MIN_SYSTEM_VERSION = "10.13"
BUNDLE_VERSION = "1.0"
LINUX_FALLBACK_ICON = "web-browser"
LINUX_DESKTOP_CATEGORIES = "Network;WebBrowser;"
LINUX_COMMENT_MARKER = "Web App created by WebNest"
LSREGISTER_PATH = (
    "/System/Library/Frameworks/CoreServices.framework/Frameworks/"
    "LaunchServices.framework/Support/lsregister"
)

# Icon placement defaults
DEFAULT_LINUX_ICON_DIR = "~/.local/share/icons/webnest"
