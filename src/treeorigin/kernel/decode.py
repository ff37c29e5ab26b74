"""Decode an origin record into a structured compose config.

For historical reasons there are two formats describing how a deployment was
composed; this reads the flat origin into the structured model the compose
pipeline understands.
"""

from typing import Dict, List, Optional

from pydantic import ValidationError

from . import keys as k
from .config import (
    ComposeConfig,
    ContainerImageReference,
    CustomOrigin,
    DeriveInitramfs,
    ModulesConfig,
    RefSpec,
    RemoteOverrideReplace,
    RepoOverrideSource,
)
from .errors import OriginParseError, OriginValidationError
from .store import OriginStore
from .tokens import decompose_sha256_nevra, split_override_source


def parse_stringlist(store: OriginStore, section: str, key: str) -> Optional[List[str]]:
    """Read a list value; None if the key is absent.

    Trailing empty tokens ("a;;") are discarded.
    """
    values = store.get_string_list(section, key)
    if values is None:
        return None
    values = list(values)
    while values and values[-1] == "":
        values.pop()
    return values


def parse_localpkglist(store: OriginStore, section: str, key: str) -> Optional[Dict[str, str]]:
    """Read a list of "sha256:nevra" tokens into a NEVRA -> sha256 map."""
    values = parse_stringlist(store, section, key)
    if values is None:
        return None
    path = k.key_path(section, key)
    pkgs: Dict[str, str] = {}
    for token in values:
        nevra, sha256 = decompose_sha256_nevra(token, path)
        if nevra in pkgs:
            raise OriginParseError(path, token, "duplicate NEVRA")
        pkgs[nevra] = sha256
    return pkgs


def parse_override_replace(store: OriginStore) -> Optional[List[RemoteOverrideReplace]]:
    """Read "repo=<name>,<pkg>,<pkg>..." entries, preserving entry order."""
    values = parse_stringlist(store, k.OVERRIDES, k.REPLACE)
    if values is None:
        return None
    path = k.OVERRIDE_REPLACE_KEY
    replacements = []
    for token in values:
        source_field, *packages = token.split(",")
        kind, name = split_override_source(source_field, path)
        if kind != k.OVERRIDE_SOURCE_REPO:
            raise OriginParseError(path, source_field, "unknown override source")
        replacements.append(RemoteOverrideReplace(
            source=RepoOverrideSource(name=name),
            packages=frozenset(packages),
        ))
    return replacements


def _parse_base_source(store: OriginStore):
    refspec = store.get_string(k.ORIGIN, k.REFSPEC)
    baserefspec = store.get_string(k.ORIGIN, k.BASEREFSPEC)
    image = store.get_string(k.ORIGIN, k.CONTAINER_IMAGE_REFERENCE)

    if refspec is not None and baserefspec is not None:
        raise OriginValidationError(
            f"Conflicting base source: found both {k.REFSPEC} and {k.BASEREFSPEC}"
        )
    ref = refspec if refspec is not None else baserefspec
    if ref is not None and image is not None:
        raise OriginValidationError(
            f"Conflicting base source: found both refspec/baserefspec and {k.CONTAINER_IMAGE_REFERENCE}"
        )
    if ref is not None:
        return RefSpec(refspec=ref)
    if image is not None:
        return ContainerImageReference(image=image)
    raise OriginValidationError(
        f"Missing base source: failed to find refspec/baserefspec/{k.CONTAINER_IMAGE_REFERENCE} in origin"
    )


def origin_to_config(store: OriginStore) -> ComposeConfig:
    """Convert an origin record into a ComposeConfig.

    Fails fast: the first invalid key raises and no partial config is returned.
    The transient section is never read.

    Raises:
        OriginValidationError: missing/conflicting base source or an invalid value.
        OriginParseError: a list key holds a malformed token.
        StoreAccessError: the store failed for a reason other than absence.
    """
    try:
        base_source = _parse_base_source(store)

        modules = None
        modules_enable = parse_stringlist(store, k.MODULES, k.ENABLE)
        modules_install = parse_stringlist(store, k.MODULES, k.INSTALL)
        if modules_enable is not None or modules_install is not None:
            modules = ModulesConfig(enable=modules_enable, install=modules_install)

        initramfs = None
        regenerate = store.get_bool(k.RPMOSTREE, k.REGENERATE_INITRAMFS)
        initramfs_etc = parse_stringlist(store, k.RPMOSTREE, k.INITRAMFS_ETC)
        initramfs_args = parse_stringlist(store, k.RPMOSTREE, k.INITRAMFS_ARGS)
        if regenerate or initramfs_etc is not None or initramfs_args is not None:
            initramfs = DeriveInitramfs(
                regenerate=regenerate,
                etc=initramfs_etc,
                args=initramfs_args,
            )

        custom_origin = None
        custom_url = store.get_string(k.ORIGIN, k.CUSTOM_URL)
        if custom_url is not None:
            custom_origin = CustomOrigin(
                url=custom_url,
                description=store.get_string(k.ORIGIN, k.CUSTOM_DESCRIPTION),
            )

        return ComposeConfig(
            base_source=base_source,
            requested_packages=parse_stringlist(store, k.PACKAGES, k.REQUESTED),
            local_packages=parse_localpkglist(store, k.PACKAGES, k.REQUESTED_LOCAL),
            local_fileoverride_packages=parse_localpkglist(
                store, k.PACKAGES, k.REQUESTED_LOCAL_FILEOVERRIDE
            ),
            override_remove_packages=parse_stringlist(store, k.OVERRIDES, k.REMOVE),
            override_replace_local_packages=parse_localpkglist(store, k.OVERRIDES, k.REPLACE_LOCAL),
            override_replace=parse_override_replace(store),
            modules=modules,
            initramfs=initramfs,
            custom_origin=custom_origin,
            cliwrap=store.get_bool(k.RPMOSTREE, k.CLIWRAP),
            override_commit=store.get_string(k.ORIGIN, k.OVERRIDE_COMMIT),
            unconfigured_state=store.get_string(k.ORIGIN, k.UNCONFIGURED_STATE),
        )
    except ValidationError as e:
        raise OriginValidationError(f"Invalid origin: {e}") from e
