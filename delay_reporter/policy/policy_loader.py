"""
Delay Reporter Policy Loader

Responsibilities:
- Load and validate runtime_policy.yaml
- Compute policy_digest so the console can report which policy is live
- Provide logging and console (HTTP) settings
- Refuse any attempt to configure the wait itself
- Fail fast on invalid/missing policy
"""

import yaml
import hashlib
import json
from pathlib import Path
from typing import Dict, Any, Optional


class PolicyValidationError(Exception):
    """Raised when policy file is invalid or missing required keys."""
    pass


class PolicyLoader:
    """Loads, validates, and provides access to the runtime policy."""

    REQUIRED_KEYS = ["version", "logging", "console"]
    REQUIRED_LOGGING_KEYS = ["verbose"]
    REQUIRED_CONSOLE_KEYS = ["host", "port", "route"]
    FIXED_TIMING_KEYS = ["timing", "target_sleep_time", "poll_interval"]

    def __init__(self, policy_path: Optional[Path] = None):
        if policy_path is None:
            policy_path = Path(__file__).parent / "runtime_policy.yaml"

        self.policy_path = Path(policy_path)
        self._policy: Optional[Dict[str, Any]] = None
        self._digest: Optional[str] = None
        self._raw_yaml: Optional[str] = None

    def load(self) -> Dict[str, Any]:
        """Load and validate the policy file. Raises PolicyValidationError on failure."""
        if not self.policy_path.exists():
            raise PolicyValidationError(f"Policy file not found: {self.policy_path}")

        try:
            self._raw_yaml = self.policy_path.read_text()
            self._policy = yaml.safe_load(self._raw_yaml)
        except yaml.YAMLError as e:
            raise PolicyValidationError(f"Invalid YAML in policy file: {e}") from e

        if self._policy is None:
            raise PolicyValidationError("Policy file is empty")
        if not isinstance(self._policy, dict):
            raise PolicyValidationError("Policy file must contain a mapping")

        self._validate()
        self._compute_digest()

        return self._policy

    def _validate(self):
        """Validate required keys and structure."""
        for key in self.REQUIRED_KEYS:
            if key not in self._policy:
                raise PolicyValidationError(f"Missing required key: {key}")

        # The wait is fixed at 5.0s polled every 0.1s
        for key in self.FIXED_TIMING_KEYS:
            if key in self._policy:
                raise PolicyValidationError(
                    f"'{key}' is not configurable. "
                    "The delay duration and poll interval are fixed; remove this key."
                )

        logging_cfg = self._policy.get("logging") or {}
        for key in self.REQUIRED_LOGGING_KEYS:
            if key not in logging_cfg:
                raise PolicyValidationError(f"Missing required logging key: logging.{key}")
        if not isinstance(logging_cfg["verbose"], bool):
            raise PolicyValidationError("logging.verbose must be true or false")

        console = self._policy.get("console") or {}
        for key in self.REQUIRED_CONSOLE_KEYS:
            if key not in console:
                raise PolicyValidationError(f"Missing required console key: console.{key}")

        if not isinstance(console["host"], str) or not console["host"]:
            raise PolicyValidationError("console.host must be a non-empty string")

        port = console["port"]
        if isinstance(port, bool) or not isinstance(port, int) or not 1 <= port <= 65535:
            raise PolicyValidationError(f"console.port must be an integer in 1..65535, got {port!r}")

        route = console["route"]
        if not isinstance(route, str) or not route.startswith("/"):
            raise PolicyValidationError(f"console.route must start with '/', got {route!r}")

    def _compute_digest(self):
        """Compute SHA256 digest of normalized policy."""
        normalized = json.dumps(self._policy, sort_keys=True, separators=(',', ':'))
        self._digest = hashlib.sha256(normalized.encode()).hexdigest()

    @property
    def policy(self) -> Dict[str, Any]:
        """Get the loaded policy. Raises if not loaded."""
        if self._policy is None:
            raise RuntimeError("Policy not loaded. Call load() first.")
        return self._policy

    @property
    def digest(self) -> str:
        """Get the policy digest. Raises if not loaded."""
        if self._digest is None:
            raise RuntimeError("Policy not loaded. Call load() first.")
        return self._digest

    @property
    def version(self) -> str:
        return self.policy.get("version", "unknown")

    def get_logging(self, key: str) -> Any:
        return self.policy.get("logging", {}).get(key)

    def is_verbose(self) -> bool:
        """Whether progress lines are printed to stderr."""
        return bool(self.get_logging("verbose"))

    def get_console(self, key: str) -> Any:
        return self.policy.get("console", {}).get(key)

    def get_console_host(self) -> str:
        return self.get_console("host")

    def get_console_port(self) -> int:
        return self.get_console("port")

    def get_console_route(self) -> str:
        return self.get_console("route")

    def to_dict(self) -> Dict[str, Any]:
        """Return policy info suitable for health output."""
        return {
            "version": self.version,
            "digest": self.digest,
            "logging": self.policy.get("logging", {}),
            "console": self.policy.get("console", {}),
        }


# Singleton instance for convenience
_default_loader: Optional[PolicyLoader] = None


def get_policy_loader(policy_path: Optional[Path] = None) -> PolicyLoader:
    """Get the policy loader singleton, creating and loading if needed."""
    global _default_loader

    if _default_loader is None or policy_path is not None:
        loader = PolicyLoader(policy_path)
        loader.load()
        if policy_path is None:
            _default_loader = loader
        return loader

    return _default_loader


def reset_policy_loader():
    """Reset the singleton (for testing)."""
    global _default_loader
    _default_loader = None
