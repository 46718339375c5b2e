"""Installation layout contract.

This module defines the stable names shared by strategies, the validator,
recovery heuristics and the persistent cache: mount-point keys, default
directory names and extension marker files.
"""

from __future__ import annotations

# Persistent cache record schema version.
CACHE_SCHEMA_VERSION = 2

# Logical mount points a caller may override (relative or absolute paths).
WEB_ROOT = "web-root"
VENDOR_ROOT = "vendor-root"
EXTENSION_CONFIG_ROOT = "extension-config-root"

MOUNT_POINTS = frozenset({WEB_ROOT, VENDOR_ROOT, EXTENSION_CONFIG_ROOT})

# Convention-derived defaults, relative to the installation root.
DEFAULT_WEB_DIR = "public"
DEFAULT_VENDOR_DIR = "vendor"
CLASSIC_EXT_SUBDIR = "typo3conf/ext"
LEGACY_SYSEXT_DIRS = ("typo3/sysext", "typo3_src/typo3/sysext")
CORE_PACKAGE_VENDOR = "typo3"
CORE_PACKAGE_PREFIX = "cms-"

# Extension markers.
LEGACY_MARKER = "ext_emconf.php"
MANIFEST_MARKER = "composer.json"

# Installation manifests feeding the freshness token.
ROOT_MANIFESTS = ("composer.json", "composer.lock", "typo3conf/PackageStates.php")
VENDOR_MANIFEST = "composer/installed.json"
WEB_MANIFEST = "typo3conf/PackageStates.php"

# Well-known directories that hold classic extension folders, relative to the
# installation root. Scanned one level deep by the container recovery pass.
KNOWN_EXTENSION_CONTAINERS = (
    "typo3conf/ext",
    "public/typo3conf/ext",
    "web/typo3conf/ext",
    "app/web/typo3conf/ext",
    "app/public/typo3conf/ext",
    "htdocs/typo3conf/ext",
)

RECOVERY_PREFIX = "recovery-"
