"""
CLI Configuration

Handles configuration loading and management.
"""

import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Dict, Optional

import yaml

from namecheap_client.models import ContactInfo


# Default config locations
DEFAULT_CONFIG_PATHS = [
    Path.home() / ".namecheap" / "config.yaml",
    Path.home() / ".namecheap" / "config.yml",
    Path("/etc/namecheap/config.yaml"),
    Path("namecheap_config.yaml"),
]


@dataclass
class EndpointConfig:
    """API endpoint configuration."""
    sandbox: bool = False
    timeout: int = 30
    verify: bool = True


@dataclass
class CredentialsConfig:
    """Credentials configuration."""
    api_user: Optional[str] = None
    api_key: Optional[str] = None
    username: Optional[str] = None
    client_ip: Optional[str] = None


@dataclass
class CLIConfig:
    """Complete CLI configuration."""
    endpoint: EndpointConfig = field(default_factory=EndpointConfig)
    credentials: CredentialsConfig = field(default_factory=CredentialsConfig)
    profile: str = "default"

    @classmethod
    def from_dict(cls, data: dict, profile: str = "default") -> "CLIConfig":
        """
        Create config from dictionary.

        Args:
            data: Configuration dictionary
            profile: Profile name to use

        Returns:
            CLIConfig instance
        """
        # Get profile-specific config or use root
        if "profiles" in data and profile in data["profiles"]:
            profile_data = data["profiles"][profile]
        elif profile != "default":
            raise ValueError(f"Profile '{profile}' not found in configuration")
        else:
            profile_data = data

        endpoint_data = profile_data.get("endpoint", {})
        endpoint = EndpointConfig(
            sandbox=bool(endpoint_data.get("sandbox", False)),
            timeout=endpoint_data.get("timeout", 30),
            verify=bool(endpoint_data.get("verify", True)),
        )

        creds_data = profile_data.get("credentials", {})
        credentials = CredentialsConfig(
            api_user=creds_data.get("api_user"),
            api_key=creds_data.get("api_key"),
            username=creds_data.get("username"),
            client_ip=creds_data.get("client_ip"),
        )

        return cls(
            endpoint=endpoint,
            credentials=credentials,
            profile=profile,
        )

    @classmethod
    def from_file(cls, path: Path, profile: str = "default") -> "CLIConfig":
        """
        Load config from YAML file.

        Args:
            path: Path to config file
            profile: Profile name to use

        Returns:
            CLIConfig instance
        """
        with open(path) as f:
            data = yaml.safe_load(f)

        return cls.from_dict(data or {}, profile)

    @classmethod
    def find_and_load(cls, profile: str = "default") -> Optional["CLIConfig"]:
        """
        Find and load config from default locations.

        Args:
            profile: Profile name to use

        Returns:
            CLIConfig instance or None if not found
        """
        for path in DEFAULT_CONFIG_PATHS:
            if path.exists():
                return cls.from_file(path, profile)
        return None


def load_contacts_file(path: str) -> Dict[str, ContactInfo]:
    """
    Load contacts from a YAML file.

    The file maps roles (registrant, tech, admin, aux_billing) to contact
    fields named as on ContactInfo. Roles that are left out reuse the
    registrant.

    Args:
        path: Path to contacts file

    Returns:
        Dict of role -> ContactInfo for all four roles

    Raises:
        ValueError: If the file is not a YAML mapping, has no registrant or an unknown field
    """
    with open(os.path.expanduser(path)) as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Contacts file is not valid YAML: {e}") from e

    if not isinstance(data, dict):
        raise ValueError("Contacts file must be a mapping")

    if "registrant" not in data:
        raise ValueError("Contacts file must define a registrant")

    known = {f.name for f in fields(ContactInfo)}
    contacts = {}
    for role in ("registrant", "tech", "admin", "aux_billing"):
        role_data = data.get(role)
        if role_data is None:
            continue
        if not isinstance(role_data, dict):
            raise ValueError(f"Contact '{role}' must be a mapping")
        unknown = set(role_data) - known
        if unknown:
            raise ValueError(f"Unknown {role} field(s): {', '.join(sorted(unknown))}")
        contacts[role] = ContactInfo(**{k: str(v) for k, v in role_data.items()})

    for role in ("tech", "admin", "aux_billing"):
        contacts.setdefault(role, contacts["registrant"])

    return contacts


def create_sample_config() -> str:
    """
    Generate sample configuration YAML.

    Returns:
        Sample config as YAML string
    """
    return """# Namecheap Client Configuration
# Copy to ~/.namecheap/config.yaml

# Default profile
endpoint:
  sandbox: false
  timeout: 30
  verify: true

credentials:
  api_user: your_api_user
  # api_key: your_api_key  # Optional, NAMECHEAP_API_KEY is used if not set
  username: your_username
  client_ip: 203.0.113.10

# Multiple profiles example
profiles:
  production:
    credentials:
      api_user: your_api_user
      username: your_username
      client_ip: 203.0.113.10

  sandbox:
    endpoint:
      sandbox: true
    credentials:
      api_user: your_sandbox_user
      username: your_sandbox_user
      client_ip: 203.0.113.10
"""


def create_sample_contacts() -> str:
    """
    Generate sample contacts YAML for domain create and set-contacts.

    Returns:
        Sample contacts as YAML string
    """
    return """# Contacts for 'namecheap domain create' / 'domain set-contacts'
# tech, admin and aux_billing default to the registrant when omitted

registrant:
  first_name: John
  last_name: Smith
  address1: 8939 S. Cross Blvd
  city: Los Angeles
  state_province: CA
  postal_code: "90045"
  country: US
  phone: "+1.6613102107"
  email_address: john@example.com
"""
