"""
Agent Profiles - Per-agent configuration loaded from YAML.

A profile enumerates the gesture ids an agent emits (e.g. mouse buttons),
the per-axis sensitivities applied to absolute motion events and whether
the agent starts out tracking.

Profiles are declared in agent_profiles.yaml next to this module:

    mouse:
      tracking: true
      ids:
        LEFT: 1
        RIGHT: 2
      sensitivities: [1, 1, 1, 1, 1, 1]

Set GESTURA_PROFILES to load a different file.
"""
import os
from pathlib import Path
from typing import Dict, Optional, Tuple

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

DEFAULT_PROFILES_PATH = Path(__file__).parent / "agent_profiles.yaml"


class ProfileError(Exception):
    """Raised when profile YAML is missing, malformed or fails validation."""
    pass


class AgentProfile(BaseModel):
    """Immutable agent configuration.

    Attributes:
        name: Profile name
        tracking: Initial tracking state of the agent
        ids: Gesture name -> gesture id
        sensitivities: Multipliers for dx, dy, dz, drx, dry, drz
    """
    name: str = "default"
    tracking: bool = True
    ids: Dict[str, int] = {}
    sensitivities: Tuple[float, float, float, float, float, float] = (1.0, 1.0, 1.0, 1.0, 1.0, 1.0)

    model_config = ConfigDict(frozen=True)

    @field_validator('ids')
    @classmethod
    def validate_ids(cls, v: Dict[str, int]) -> Dict[str, int]:
        """Gesture ids must be non-negative."""
        for name, gesture_id in v.items():
            if gesture_id < 0:
                raise ValueError(f'Gesture id {name} must be non-negative, got {gesture_id}')
        return v

    def gesture_id(self, name: str) -> int:
        """Look up a gesture id by name.

        Raises:
            KeyError: If the profile does not define the gesture
        """
        try:
            return self.ids[name]
        except KeyError:
            raise KeyError(f"Profile '{self.name}' defines no gesture '{name}'") from None


def _profiles_path(path: Optional[Path]) -> Path:
    if path is not None:
        return Path(path)
    env_path = os.environ.get('GESTURA_PROFILES')
    if env_path:
        return Path(env_path).expanduser()
    return DEFAULT_PROFILES_PATH


def load_profiles(path: Optional[Path] = None) -> Dict[str, AgentProfile]:
    """Load all profiles from a YAML file.

    Args:
        path: YAML file (default: GESTURA_PROFILES or the bundled file)

    Returns:
        Profile name -> AgentProfile

    Raises:
        ProfileError: If the file is missing or any profile is invalid
    """
    path = _profiles_path(path)
    if not path.exists():
        raise ProfileError(f"Profile file not found: {path}")

    with open(path) as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ProfileError(f"{path}: expected a mapping of profile names, got {type(data).__name__}")

    profiles: Dict[str, AgentProfile] = {}
    for name, config in data.items():
        if not isinstance(config, dict):
            raise ProfileError(f"{path}: profile '{name}' must be a mapping")
        try:
            profiles[name] = AgentProfile(name=name, **config)
        except ValidationError as e:
            raise ProfileError(f"{path}: invalid profile '{name}': {e}") from e
    return profiles


def get_profile(name: str, path: Optional[Path] = None) -> AgentProfile:
    """Load a single profile by name.

    Raises:
        ProfileError: If the profile does not exist or is invalid
    """
    profiles = load_profiles(path)
    if name not in profiles:
        raise ProfileError(f"Unknown profile '{name}'. Available: {', '.join(sorted(profiles))}")
    return profiles[name]
