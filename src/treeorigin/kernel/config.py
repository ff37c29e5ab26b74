"""Pydantic models for the structured compose config with canonical validation."""

from typing import Annotated, Dict, FrozenSet, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer, field_validator

from .tokens import is_sha256


def _sorted_list(values: FrozenSet[str]) -> List[str]:
    return sorted(values)


# Sets are unordered in memory; JSON output lists them sorted so dumps are byte-stable.
PackageSet = Annotated[
    FrozenSet[str],
    PlainSerializer(_sorted_list, return_type=List[str], when_used="json"),
]

# NEVRA -> sha256
LocalPackageMap = Dict[str, str]


def _none_if_empty(v):
    """Canonicalize empty collections to None (absent and empty are equivalent)."""
    if v is not None and len(v) == 0:
        return None
    return v


def _validate_local_packages(v: Optional[LocalPackageMap]) -> Optional[LocalPackageMap]:
    if v is None:
        return None
    for nevra, sha256 in v.items():
        if not nevra:
            raise ValueError("Local package NEVRA must not be empty")
        if not is_sha256(sha256):
            raise ValueError(f"Local package '{nevra}' has invalid sha256 '{sha256}'")
    return _none_if_empty(v)


class RefSpec(BaseModel):
    """Base source: an OSTree refspec, e.g. "fedora:fedora/34/x86_64/silverblue"."""
    kind: Literal["refspec"] = "refspec"
    refspec: str = Field(..., min_length=1)

    model_config = ConfigDict(extra="forbid", frozen=True)


class ContainerImageReference(BaseModel):
    """Base source: a container image reference, e.g. "ostree-unverified-registry:quay.io/x/y"."""
    kind: Literal["container-image-reference"] = "container-image-reference"
    image: str = Field(..., min_length=1)

    model_config = ConfigDict(extra="forbid", frozen=True)


BaseSource = Annotated[Union[RefSpec, ContainerImageReference], Field(discriminator="kind")]


class RepoOverrideSource(BaseModel):
    """Replacement packages come from the named rpm-md repository.

    This is the only source kind today; new kinds get their own model with a
    distinct ``kind`` and join a discriminated union.
    """
    kind: Literal["repo"] = "repo"
    name: str = Field(..., min_length=1)

    model_config = ConfigDict(extra="forbid", frozen=True)

    def __str__(self) -> str:
        return f"repo={self.name}"


class RemoteOverrideReplace(BaseModel):
    """Replace base packages with versions from a remote source."""
    source: RepoOverrideSource
    packages: PackageSet = Field(default_factory=frozenset)

    model_config = ConfigDict(extra="forbid", frozen=True)


class ModulesConfig(BaseModel):
    enable: Optional[PackageSet] = None
    install: Optional[PackageSet] = None

    model_config = ConfigDict(extra="forbid", frozen=True)

    @field_validator("enable", "install")
    @classmethod
    def canonicalize_sets(cls, v: Optional[FrozenSet[str]]) -> Optional[FrozenSet[str]]:
        return _none_if_empty(v)

    def is_empty(self) -> bool:
        return self.enable is None and self.install is None


class DeriveInitramfs(BaseModel):
    """Client-side initramfs regeneration."""
    regenerate: bool = False
    etc: Optional[PackageSet] = None  # Files under /etc tracked into the initramfs
    args: Optional[List[str]] = None  # Ordered dracut arguments

    model_config = ConfigDict(extra="forbid", frozen=True)

    @field_validator("etc", "args")
    @classmethod
    def canonicalize_lists(cls, v):
        return _none_if_empty(v)

    def is_empty(self) -> bool:
        return not self.regenerate and self.etc is None and self.args is None


class CustomOrigin(BaseModel):
    """Free-form origin declared by external tooling."""
    url: str
    description: Optional[str] = None

    model_config = ConfigDict(extra="forbid", frozen=True)


class ComposeConfig(BaseModel):
    """How an OS image was composed.

    Canonical form: every optional field is None when it is at its default
    state (empty collections, cliwrap=False, an initramfs section that does
    nothing). Two configs describing the same composition therefore compare
    equal.
    """
    base_source: BaseSource
    requested_packages: Optional[PackageSet] = None
    local_packages: Optional[LocalPackageMap] = None
    local_fileoverride_packages: Optional[LocalPackageMap] = None
    override_remove_packages: Optional[PackageSet] = None
    override_replace_local_packages: Optional[LocalPackageMap] = None
    override_replace: Optional[List[RemoteOverrideReplace]] = None
    modules: Optional[ModulesConfig] = None
    initramfs: Optional[DeriveInitramfs] = None
    custom_origin: Optional[CustomOrigin] = None
    cliwrap: Optional[bool] = None
    override_commit: Optional[str] = None
    unconfigured_state: Optional[str] = None  # Carried through opaquely

    model_config = ConfigDict(extra="forbid", frozen=True)

    @field_validator("requested_packages", "override_remove_packages", "override_replace")
    @classmethod
    def canonicalize_collections(cls, v):
        return _none_if_empty(v)

    @field_validator("local_packages", "local_fileoverride_packages", "override_replace_local_packages")
    @classmethod
    def validate_local_packages(cls, v: Optional[LocalPackageMap]) -> Optional[LocalPackageMap]:
        return _validate_local_packages(v)

    @field_validator("modules")
    @classmethod
    def canonicalize_modules(cls, v: Optional[ModulesConfig]) -> Optional[ModulesConfig]:
        if v is not None and v.is_empty():
            return None
        return v

    @field_validator("initramfs")
    @classmethod
    def canonicalize_initramfs(cls, v: Optional[DeriveInitramfs]) -> Optional[DeriveInitramfs]:
        if v is not None and v.is_empty():
            return None
        return v

    @field_validator("cliwrap")
    @classmethod
    def canonicalize_cliwrap(cls, v: Optional[bool]) -> Optional[bool]:
        return True if v else None
