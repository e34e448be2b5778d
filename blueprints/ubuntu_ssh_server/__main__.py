"""
Ubuntu SSH Server Blueprint

Deploys a single Ubuntu EC2 instance reachable over SSH:
1. A VPC with public subnet(s) and an optional NAT gateway
2. A key pair, either created from public key material or an existing one
3. A security group allowing SSH plus any additional configured ports
4. The instance itself, bootstrapped from cloud-init.yaml

All settings come from the stack config (see Pulumi.dev.yaml).
"""

import os
import sys

# Add the repository root to the path so we can import the ubuntu_ssh package
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "../..")))

from ubuntu_ssh.config import load_config
from ubuntu_ssh.deployment import deploy, export_outputs

config = load_config()
export_outputs(deploy(config))
