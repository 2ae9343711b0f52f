"""Core constants for safefs.

This module defines constants used throughout the package:
- The media type to file extension table used by mime type lookups
- The prefix of hidden temporary sibling names
- Retry limits for temp-name and temp-file creation
"""

# ============================================================================
# Media Types
# ============================================================================

#: Canonical media type -> file extensions (first entry is the preferred one)
MIME_TYPES: dict[str, tuple[str, ...]] = {
    # Text and XML
    "text/plain": ("txt",),
    "text/html": ("htm", "html"),
    "text/css": ("css",),
    "text/javascript": ("js",),
    # Documents & languages
    "application/rtf": ("rtf",),
    "application/msword": ("doc",),
    "application/pdf": ("pdf",),
    "application/postscript": ("eps",),
    "application/x-httpd-php": ("php",),
    # Data sources
    "text/csv": ("csv",),
    "application/json": ("json",),
    "application/ld+json": ("jsonld",),
    "application/vnd.ms-excel": ("xls",),
    "application/xml": ("xml",),
    # Images and vector graphics
    "image/png": ("png", "apng"),
    "image/jpeg": ("jpg", "jpeg", "jpe"),
    "image/gif": ("gif",),
    "image/bmp": ("bmp",),
    "image/x-icon": ("ico",),
    "image/tiff": ("tif", "tiff"),
    "image/svg+xml": ("svg", "svgz"),
    "image/webp": ("webp",),
    "video/webm": ("webm",),
    # Archives
    "application/x-7z-compressed": ("7z",),
    "application/zip": ("zip",),
    "application/x-rar-compressed": ("rar",),
    "application/x-msdownload": ("exe", "msi"),
    "application/vnd.ms-cab-compressed": ("cab",),
    "application/x-tar": ("tar",),
    # Audio/video
    "audio/mp3": ("mp3", "mpga"),
    "audio/flac": ("flac",),
    "video/quicktime": ("mov", "qt"),
    # Fonts
    "font/ttf": ("ttf",),
    "font/otf": ("otf",),
    "font/woff": ("woff",),
    "font/woff2": ("woff2",),
    "application/vnd.ms-fontobject": ("eot",),
}

#: Extension -> media type (first declaration wins)
EXTENSION_TYPES: dict[str, str] = {}
for _mime, _extensions in MIME_TYPES.items():
    for _ext in _extensions:
        EXTENSION_TYPES.setdefault(_ext, _mime)
del _mime, _extensions, _ext

# ============================================================================
# Temporary Names
# ============================================================================

#: Prefix of hidden sibling names used while removing a directory
TEMP_NAME_PREFIX = ".!"

#: Fresh names tried before giving up on a temp sibling or temp file
TEMP_NAME_ATTEMPTS = 10
