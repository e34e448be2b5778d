import pulumi
import pulumi_aws as aws
from dataclasses import dataclass
from typing import Optional, Dict, Union

from ..exceptions import ConfigurationError


@dataclass(frozen=True)
class CreatedKeyPair:
    """A key pair to be created in AWS from existing public key material."""
    public_key_material: str

    def __post_init__(self):
        if not self.public_key_material:
            raise ConfigurationError("publicKeyMaterial must not be empty")


@dataclass(frozen=True)
class ExistingKeyPair:
    """A key pair that already exists in the AWS account, referenced by name."""
    name: str

    def __post_init__(self):
        if not self.name:
            raise ConfigurationError("existingKeyPairName must not be empty")


KeyPairSelection = Union[CreatedKeyPair, ExistingKeyPair]


def _present(value: Optional[str]) -> bool:
    return value is not None and value.strip() != ""


def select_keypair(
    create_key_pair: bool,
    public_key_material: Optional[str] = None,
    existing_key_pair_name: Optional[str] = None,
) -> KeyPairSelection:
    """
    Decide whether to create a new key pair or reference an existing one.

    Args:
        create_key_pair: Whether a new key pair should be created
        public_key_material: Public key (OpenSSH format) used when creating
        existing_key_pair_name: Name of a key pair that already exists in AWS

    Returns:
        KeyPairSelection: CreatedKeyPair or ExistingKeyPair

    Raises:
        ConfigurationError: If neither mode is fully configured
    """
    if create_key_pair and _present(public_key_material):
        return CreatedKeyPair(public_key_material.strip())
    if _present(existing_key_pair_name):
        return ExistingKeyPair(existing_key_pair_name.strip())

    if create_key_pair:
        raise ConfigurationError(
            "Missing required configuration value 'publicKeyMaterial'",
            context="createKeyPair=true needs publicKeyMaterial, "
                    "or set existingKeyPairName to reuse a key pair",
        )
    raise ConfigurationError(
        "Missing required configuration value 'existingKeyPairName'",
        context="set existingKeyPairName, or set createKeyPair=true "
                "together with publicKeyMaterial",
    )


def create_keypair(
    name: str,
    selection: KeyPairSelection,
    tags: Optional[Dict[str, str]] = None,
    opts: Optional[pulumi.ResourceOptions] = None,
) -> pulumi.Output[str]:
    """
    Materialize a key pair selection and return the key name to launch with.

    A CreatedKeyPair registers an aws.ec2.KeyPair resource; an ExistingKeyPair
    registers nothing and simply passes its name through.

    Args:
        name: Logical name of the key pair resource
        selection: Result of select_keypair
        tags: Optional tags to apply to a created key pair
        opts: Optional resource options

    Returns:
        pulumi.Output[str]: The key pair name
    """
    if isinstance(selection, CreatedKeyPair):
        pulumi.log.info(f"Creating key pair '{name}' from supplied public key material")
        keypair = aws.ec2.KeyPair(
            name,
            public_key=selection.public_key_material,
            tags=tags or {},
            opts=opts,
        )
        return keypair.key_name

    pulumi.log.info(f"Using existing key pair '{selection.name}'")
    return pulumi.Output.from_input(selection.name)


def get_keypair(name: str) -> pulumi.Output[str]:
    """
    Look up an existing key pair by name.

    The lookup fails at preview time when the key pair does not exist, which
    surfaces a misspelled existingKeyPairName before an instance is launched.

    Args:
        name: Name of the key pair to look up

    Returns:
        pulumi.Output[str]: The key name reported by AWS
    """
    return aws.ec2.get_key_pair_output(key_name=name).key_name
