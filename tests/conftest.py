"""
Shared test fixtures and configuration.

Resources are registered against Pulumi's mock engine, so no AWS account or
Pulumi backend is needed.
"""

import pytest
import pulumi
import os
import sys

# Add the parent directory to the path so we can import the ubuntu_ssh package
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

MOCK_AMI_ID = "ami-0123456789abcdef0"
MOCK_ZONES = ["us-east-1a", "us-east-1b", "us-east-1c"]


class PulumiMocks(pulumi.runtime.Mocks):
    """Mock AWS provider that echoes inputs and records every call."""

    def __init__(self):
        self.resources = []
        self.calls = []

    def reset(self):
        self.resources.clear()
        self.calls.clear()

    def new_resource(self, args: pulumi.runtime.MockResourceArgs):
        self.resources.append(args)
        outputs = dict(args.inputs)
        if args.typ == "aws:ec2/instance:Instance":
            outputs.update({
                "publicIp": "203.0.113.10",
                "privateIp": "10.0.0.10",
                "publicDns": "ec2-203-0-113-10.compute-1.amazonaws.com",
            })
        elif args.typ == "aws:ec2/keyPair:KeyPair":
            outputs.setdefault("keyName", args.name)
        return [f"{args.name}_id", outputs]

    def call(self, args: pulumi.runtime.MockCallArgs):
        self.calls.append(args)
        if args.token == "aws:ec2/getAmi:getAmi":
            return {"id": MOCK_AMI_ID, "architecture": "x86_64"}
        if args.token == "aws:index/getAvailabilityZones:getAvailabilityZones":
            return {"id": "us-east-1", "names": MOCK_ZONES, "zoneIds": ["use1-az1", "use1-az2", "use1-az4"]}
        if args.token == "aws:ec2/getKeyPair:getKeyPair":
            return {"id": "key-0123456789", "keyName": args.args.get("keyName")}
        return {}


MOCKS = PulumiMocks()
pulumi.runtime.set_mocks(MOCKS, preview=False)


@pytest.fixture
def pulumi_mocks():
    """Fixture giving access to the recorded resources and invokes."""
    MOCKS.reset()
    return MOCKS


@pytest.fixture
def cloud_init_file(tmp_path):
    """A minimal cloud-init file on disk."""
    path = tmp_path / "cloud-init.yaml"
    path.write_text("#cloud-config\npackages:\n  - htop\n", encoding="utf-8")
    return str(path)


@pytest.fixture
def ami_name_patterns(pulumi_mocks):
    """Returns a callable listing the name filters of every AMI lookup so far."""
    def patterns():
        found = []
        for call in pulumi_mocks.calls:
            if call.token != "aws:ec2/getAmi:getAmi":
                continue
            for f in call.args.get("filters", []):
                if f["name"] == "name":
                    found.extend(f["values"])
        return found
    return patterns
