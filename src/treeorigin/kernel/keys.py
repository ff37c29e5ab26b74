"""Fixed origin vocabulary.

These names are the on-disk contract with previously written origin files;
renaming any of them breaks existing deployments.
"""

ORIGIN = "origin"
RPMOSTREE = "rpmostree"
PACKAGES = "packages"
MODULES = "modules"
OVERRIDES = "overrides"

# Deployment-local state owned by libostree; never translated.
TRANSIENT = "libostree-transient"

# [origin]
REFSPEC = "refspec"
BASEREFSPEC = "baserefspec"
CONTAINER_IMAGE_REFERENCE = "container-image-reference"
CUSTOM_URL = "custom-url"
CUSTOM_DESCRIPTION = "custom-description"
OVERRIDE_COMMIT = "override-commit"
UNCONFIGURED_STATE = "unconfigured-state"

# [rpmostree]
REGENERATE_INITRAMFS = "regenerate-initramfs"
INITRAMFS_ETC = "initramfs-etc"
INITRAMFS_ARGS = "initramfs-args"
CLIWRAP = "ex-cliwrap"

# [packages]
REQUESTED = "requested"
REQUESTED_LOCAL = "requested-local"
REQUESTED_LOCAL_FILEOVERRIDE = "requested-local-fileoverride"

# [modules]
ENABLE = "enable"
INSTALL = "install"

# [overrides]
REMOVE = "remove"
REPLACE_LOCAL = "replace-local"
REPLACE = "replace"

# Override source kind for remote replacements ("repo=<name>").
OVERRIDE_SOURCE_REPO = "repo"


def key_path(section: str, key: str) -> str:
    return f"{section}/{key}"


# Lists decoded into sets or maps: serialization order is not preserved.
UNORDERED_LIST_KEYS = frozenset({
    key_path(PACKAGES, REQUESTED),
    key_path(PACKAGES, REQUESTED_LOCAL),
    key_path(PACKAGES, REQUESTED_LOCAL_FILEOVERRIDE),
    key_path(MODULES, ENABLE),
    key_path(MODULES, INSTALL),
    key_path(OVERRIDES, REMOVE),
    key_path(OVERRIDES, REPLACE_LOCAL),
    key_path(RPMOSTREE, INITRAMFS_ETC),
})

# Ordered list of entries whose package fields are unordered.
OVERRIDE_REPLACE_KEY = key_path(OVERRIDES, REPLACE)

LIST_KEYS = UNORDERED_LIST_KEYS | {
    OVERRIDE_REPLACE_KEY,
    key_path(RPMOSTREE, INITRAMFS_ARGS),
}

BOOLEAN_KEYS = frozenset({
    key_path(RPMOSTREE, REGENERATE_INITRAMFS),
    key_path(RPMOSTREE, CLIWRAP),
})
