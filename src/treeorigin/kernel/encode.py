"""Encode a structured compose config as an origin record."""

from typing import Dict, Iterable, Optional

from . import keys as k
from .config import ComposeConfig, ContainerImageReference, RefSpec
from .errors import OriginValidationError
from .keyfile import KeyFile
from .tokens import format_sha256_nevra


def set_string_list_optional(kf: KeyFile, section: str, key: str, values: Iterable[str]) -> None:
    """Write a list value; nothing is written for an empty list."""
    values = list(values)
    if values:
        kf.set_string_list(section, key, values)


def set_sha256_nevra_pkgs(kf: KeyFile, section: str, key: str, pkgs: Optional[Dict[str, str]]) -> None:
    if pkgs is None:
        return
    tokens = [format_sha256_nevra(nevra, pkgs[nevra]) for nevra in sorted(pkgs)]
    set_string_list_optional(kf, section, key, tokens)


def config_to_origin(config: ComposeConfig, may_require_local_assembly: bool = False) -> KeyFile:
    """Convert a ComposeConfig into an origin keyfile.

    Args:
        config: Config to encode.
        may_require_local_assembly: Whether the deployment may need client-side
            package assembly. Legacy tooling expects a refspec base source under
            "baserefspec" in that case and under "refspec" otherwise.

    Defaults (empty lists, False booleans, absent strings) are never written.
    Sets are written sorted, maps sorted by NEVRA.
    """
    kf = KeyFile()

    base = getattr(config, "base_source", None)
    if isinstance(base, RefSpec):
        key = k.BASEREFSPEC if may_require_local_assembly else k.REFSPEC
        kf.set_string(k.ORIGIN, key, base.refspec)
    elif isinstance(base, ContainerImageReference):
        kf.set_string(k.ORIGIN, k.CONTAINER_IMAGE_REFERENCE, base.image)
    else:
        # Only reachable through model_construct(), which skips validation.
        raise OriginValidationError(f"Config has no base source: {base!r}")

    # Packages
    if config.requested_packages is not None:
        set_string_list_optional(kf, k.PACKAGES, k.REQUESTED, sorted(config.requested_packages))
    set_sha256_nevra_pkgs(kf, k.PACKAGES, k.REQUESTED_LOCAL, config.local_packages)
    set_sha256_nevra_pkgs(
        kf, k.PACKAGES, k.REQUESTED_LOCAL_FILEOVERRIDE, config.local_fileoverride_packages
    )

    # Overrides
    if config.override_remove_packages is not None:
        set_string_list_optional(kf, k.OVERRIDES, k.REMOVE, sorted(config.override_remove_packages))
    set_sha256_nevra_pkgs(kf, k.OVERRIDES, k.REPLACE_LOCAL, config.override_replace_local_packages)
    if config.override_replace is not None:
        entries = [
            ",".join([str(ovr.source)] + sorted(ovr.packages))
            for ovr in config.override_replace
        ]
        set_string_list_optional(kf, k.OVERRIDES, k.REPLACE, entries)

    # Modules
    if config.modules is not None:
        if config.modules.enable is not None:
            set_string_list_optional(kf, k.MODULES, k.ENABLE, sorted(config.modules.enable))
        if config.modules.install is not None:
            set_string_list_optional(kf, k.MODULES, k.INSTALL, sorted(config.modules.install))

    # Initramfs
    initramfs = config.initramfs
    if initramfs is not None:
        if initramfs.regenerate:
            kf.set_bool(k.RPMOSTREE, k.REGENERATE_INITRAMFS, True)
        if initramfs.etc is not None:
            set_string_list_optional(kf, k.RPMOSTREE, k.INITRAMFS_ETC, sorted(initramfs.etc))
        if initramfs.args is not None:
            set_string_list_optional(kf, k.RPMOSTREE, k.INITRAMFS_ARGS, initramfs.args)

    # Custom origin
    if config.custom_origin is not None:
        kf.set_string(k.ORIGIN, k.CUSTOM_URL, config.custom_origin.url)
        if config.custom_origin.description is not None:
            kf.set_string(k.ORIGIN, k.CUSTOM_DESCRIPTION, config.custom_origin.description)

    if config.cliwrap:
        kf.set_bool(k.RPMOSTREE, k.CLIWRAP, True)

    if config.override_commit is not None:
        kf.set_string(k.ORIGIN, k.OVERRIDE_COMMIT, config.override_commit)
    if config.unconfigured_state is not None:
        kf.set_string(k.ORIGIN, k.UNCONFIGURED_STATE, config.unconfigured_state)

    return kf
