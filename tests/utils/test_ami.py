import pytest
import pulumi
from unittest.mock import patch
from types import MappingProxyType
from ubuntu_ssh.utils.ami import (
    get_ubuntu_ami,
    get_ubuntu_ami_name_pattern,
    UBUNTU_AMI_NAME_PATTERNS,
    DEFAULT_UBUNTU_VERSION,
    CANONICAL_OWNER_ID,
)

@pytest.mark.parametrize("version,pattern", [
    ("20.04", "ubuntu/images/hvm-ssd/ubuntu-focal-20.04-amd64-server-*"),
    ("22.04", "ubuntu/images/hvm-ssd/ubuntu-jammy-22.04-amd64-server-*"),
    ("24.04", "ubuntu/images/hvm-ssd/ubuntu-noble-24.04-amd64-server-*"),
])
def test_known_versions(version, pattern):
    assert get_ubuntu_ami_name_pattern(version) == pattern

@pytest.mark.parametrize("version", ["18.04", "", "latest", "22.10"])
def test_unknown_version_falls_back_to_default(version):
    """Unknown versions use the 22.04 pattern rather than failing."""
    assert get_ubuntu_ami_name_pattern(version) == get_ubuntu_ami_name_pattern(DEFAULT_UBUNTU_VERSION)
    assert "jammy-22.04" in get_ubuntu_ami_name_pattern(version)

def test_architecture_is_substituted():
    assert get_ubuntu_ami_name_pattern("24.04", "arm64") == \
        "ubuntu/images/hvm-ssd/ubuntu-noble-24.04-arm64-server-*"

def test_pattern_table_is_immutable():
    assert isinstance(UBUNTU_AMI_NAME_PATTERNS, MappingProxyType)
    with pytest.raises(TypeError):
        UBUNTU_AMI_NAME_PATTERNS["18.04"] = "ubuntu/images/hvm-ssd/ubuntu-bionic-*"

@pulumi.runtime.test
def test_get_ubuntu_ami_filters(pulumi_mocks):
    ami_id = get_ubuntu_ami("24.04")

    def check(value):
        assert value == "ami-0123456789abcdef0"
        calls = [c for c in pulumi_mocks.calls if c.token == "aws:ec2/getAmi:getAmi"]
        assert len(calls) == 1
        args = calls[0].args
        assert args["mostRecent"] is True
        assert args["owners"] == [CANONICAL_OWNER_ID]
        assert {f["name"]: f["values"] for f in args["filters"]} == {
            "name": ["ubuntu/images/hvm-ssd/ubuntu-noble-24.04-amd64-server-*"],
            "virtualization-type": ["hvm"],
        }

    return ami_id.apply(check)

@pulumi.runtime.test
def test_get_ubuntu_ami_warns_on_fallback(pulumi_mocks, ami_name_patterns):
    with patch("pulumi.log.warn") as warn:
        ami_id = get_ubuntu_ami("18.04")

    warn.assert_called_once()
    assert "18.04" in warn.call_args.args[0]

    def check(value):
        assert value == "ami-0123456789abcdef0"
        assert ami_name_patterns() == ["ubuntu/images/hvm-ssd/ubuntu-jammy-22.04-amd64-server-*"]

    return ami_id.apply(check)
