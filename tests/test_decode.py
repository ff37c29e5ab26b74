"""Tests for decoding origins into compose configs."""

import pytest

from treeorigin.kernel.config import (
    ContainerImageReference,
    CustomOrigin,
    DeriveInitramfs,
    ModulesConfig,
    RefSpec,
    RemoteOverrideReplace,
    RepoOverrideSource,
)
from treeorigin.kernel.decode import origin_to_config
from treeorigin.kernel.errors import (
    KeyFileError,
    OriginParseError,
    OriginValidationError,
)
from treeorigin.kernel.keyfile import KeyFile

SHA = "4ed748ba060fce4571e7ef19f3f5ed6209f67dbac8327af0d38ea70b96d2f723"


def _decode(text: str):
    return origin_to_config(KeyFile.from_text(text))


def test_empty_origin_fails():
    with pytest.raises(OriginValidationError, match="Missing base source"):
        _decode("[origin]\n")
    with pytest.raises(OriginValidationError):
        _decode("[packages]\nrequested=foo;\n")


def test_base_refspec(base_origin):
    config = origin_to_config(base_origin)
    assert config.base_source == RefSpec(refspec="foo:bar/x86_64/baz")
    assert config.requested_packages is None
    assert config.local_packages is None
    assert config.override_replace is None
    assert config.modules is None
    assert config.initramfs is None


def test_baserefspec_with_packages():
    config = _decode(
        "[origin]\n"
        "baserefspec=fedora/33/x86_64/silverblue\n"
        "\n"
        "[packages]\n"
        "requested=virt-manager;libvirt;pcsc-lite-ccid\n"
    )
    assert config.base_source == RefSpec(refspec="fedora/33/x86_64/silverblue")
    assert len(config.requested_packages) == 3
    assert "libvirt" in config.requested_packages


def test_requested_packages_set():
    config = _decode("[origin]\nrefspec=a\n[packages]\nrequested=libvirt;fish;\n")
    assert config.requested_packages == frozenset({"libvirt", "fish"})
    assert len(config.requested_packages) == 2


def test_token_order_does_not_matter():
    a = _decode("[origin]\nrefspec=a\n[packages]\nrequested=libvirt;fish;\n[modules]\nenable=x;y;\n")
    b = _decode("[origin]\nrefspec=a\n[packages]\nrequested=fish;libvirt\n[modules]\nenable=y;x;\n")
    assert a == b


def test_container_image_reference():
    config = _decode("[origin]\ncontainer-image-reference=ostree-unverified-registry:quay.io/x/y\n")
    assert config.base_source == ContainerImageReference(image="ostree-unverified-registry:quay.io/x/y")


@pytest.mark.parametrize("text", [
    "[origin]\nrefspec=a\ncontainer-image-reference=b\n",
    "[origin]\nbaserefspec=a\ncontainer-image-reference=b\n",
    "[origin]\nrefspec=a\nbaserefspec=b\n",
])
def test_conflicting_base_source(text):
    with pytest.raises(OriginValidationError, match="Conflicting base source"):
        _decode(text)


def test_empty_refspec_is_validation_error():
    with pytest.raises(OriginValidationError):
        _decode("[origin]\nrefspec=\n")


def test_complex(complex_origin):
    config = origin_to_config(complex_origin)
    assert config.base_source == RefSpec(refspec="fedora:fedora/34/x86_64/silverblue")
    assert config.override_commit == "41af286dc0b172ed2f1ca934fd2278de4a1192302ffa07087cea2682e7d372e3"
    assert config.modules == ModulesConfig(
        enable={"foo:2.0", "bar:rolling"},
        install={"baz:next/development"},
    )
    assert config.override_replace == [
        RemoteOverrideReplace(
            source=RepoOverrideSource(name="foobar"),
            packages={"systemd"},
        ),
        RemoteOverrideReplace(
            source=RepoOverrideSource(name="bazboo"),
            packages={"kernel", "kernel-core", "kernel-modules"},
        ),
    ]
    assert config.initramfs == DeriveInitramfs(
        regenerate=True,
        etc={"/etc/cmdline.d/foobar.conf"},
        args=["-I", "/etc/foobar.conf"],
    )
    assert config.local_packages == {"foo-1.2-3.x86_64": SHA}
    assert config.override_remove_packages == frozenset({"docker"})
    assert len(config.override_replace_local_packages) == 3
    assert config.override_replace_local_packages["rpm-ostree-2021.1-2.fc33.x86_64"] == (
        "648ab3ff4d4b708ea180269297de5fa3e972f4481d47b7879c6329272e474d68"
    )


def test_transient_section_not_read():
    with_transient = _decode("[origin]\nrefspec=a\n[libostree-transient]\npinned=true\n")
    assert with_transient == _decode("[origin]\nrefspec=a\n")


def test_absent_and_empty_lists_equivalent():
    absent = _decode("[origin]\nrefspec=a\n")
    empty = _decode(
        "[origin]\nrefspec=a\n"
        "[packages]\nrequested=\nrequested-local=\n"
        "[modules]\nenable=\n"
        "[overrides]\nremove=\nreplace=\n"
        "[rpmostree]\ninitramfs-args=\nregenerate-initramfs=false\nex-cliwrap=false\n"
    )
    assert empty == absent
    assert empty.requested_packages is None
    assert empty.modules is None
    assert empty.initramfs is None


def test_trailing_empty_tokens_discarded():
    config = _decode("[origin]\nrefspec=a\n[rpmostree]\ninitramfs-args=-I;;\n")
    assert config.initramfs.args == ["-I"]


def test_initramfs_from_regenerate_only():
    config = _decode("[origin]\nrefspec=a\n[rpmostree]\nregenerate-initramfs=true\n")
    assert config.initramfs == DeriveInitramfs(regenerate=True)


def test_custom_origin_and_cliwrap():
    config = _decode(
        "[origin]\nrefspec=a\ncustom-url=https://example.com/x\ncustom-description=Example\n"
        "unconfigured-state=Subscribe to enable updates\n"
        "[rpmostree]\nex-cliwrap=true\n"
    )
    assert config.custom_origin == CustomOrigin(url="https://example.com/x", description="Example")
    assert config.cliwrap is True
    assert config.unconfigured_state == "Subscribe to enable updates"


def test_local_package_epoch_in_nevra():
    config = _decode(f"[origin]\nrefspec=a\n[packages]\nrequested-local={SHA}:foo-1:2.0-1.x86_64;\n")
    assert config.local_packages == {"foo-1:2.0-1.x86_64": SHA}


@pytest.mark.parametrize("token", [
    "foo-1.2-3.x86_64",  # no separator
    f"{SHA}:",  # empty NEVRA
    ":foo-1.2-3.x86_64",  # empty hash
    "nothex:foo-1.2-3.x86_64",
])
def test_malformed_local_token(token):
    with pytest.raises(OriginParseError) as excinfo:
        _decode(f"[origin]\nrefspec=a\n[packages]\nrequested-local={token};\n")
    assert excinfo.value.key == "packages/requested-local"
    assert excinfo.value.token == token
    assert "packages/requested-local" in str(excinfo.value)


def test_duplicate_local_nevra():
    other = "0" * 64
    with pytest.raises(OriginParseError, match="duplicate NEVRA"):
        _decode(f"[origin]\nrefspec=a\n[overrides]\nreplace-local={SHA}:foo-1-1.x86_64;{other}:foo-1-1.x86_64;\n")


def test_override_replace():
    config = _decode("[origin]\nrefspec=a\n[overrides]\nreplace=repo=foobar,systemd;\n")
    assert config.override_replace == [
        RemoteOverrideReplace(source=RepoOverrideSource(name="foobar"), packages={"systemd"})
    ]


@pytest.mark.parametrize("value", [
    "git=foobar,systemd;",
    "foobar,systemd;",
    "repo=,systemd;",
])
def test_override_replace_unknown_source(value):
    with pytest.raises(OriginParseError) as excinfo:
        _decode(f"[origin]\nrefspec=a\n[overrides]\nreplace={value}\n")
    assert excinfo.value.key == "overrides/replace"
    assert "override source" in str(excinfo.value)


def test_malformed_boolean_is_store_error():
    with pytest.raises(KeyFileError):
        _decode("[origin]\nrefspec=a\n[rpmostree]\nex-cliwrap=maybe\n")
