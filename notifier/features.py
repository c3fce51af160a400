"""Feature gates.

An explicit gate set built from settings and passed to whatever needs it;
there is no process-wide gate map.
"""

from typing import Dict, Optional

from notifier.configuration.settings import FeatureSettings

# Cache Secrets and ConfigMaps. Increases memory usage and requires
# cluster-wide list/watch permissions on both kinds.
CACHE_SECRETS_AND_CONFIGMAPS = "CacheSecretsAndConfigMaps"

DEFAULT_FEATURE_GATES: Dict[str, bool] = {
    CACHE_SECRETS_AND_CONFIGMAPS: False,
}


class FeatureGates:
    """Set of known feature gates and their states.

    Example:
        gates = FeatureGates.from_settings(settings.features)
        if gates.enabled(CACHE_SECRETS_AND_CONFIGMAPS):
            ...
    """

    def __init__(self, overrides: Optional[Dict[str, bool]] = None):
        self._gates = dict(DEFAULT_FEATURE_GATES)
        for name, value in (overrides or {}).items():
            if name not in self._gates:
                raise KeyError(f"unknown feature gate {name!r}")
            self._gates[name] = value

    @classmethod
    def from_settings(cls, settings: FeatureSettings) -> "FeatureGates":
        return cls({CACHE_SECRETS_AND_CONFIGMAPS: settings.cache_secrets_and_configmaps})

    def enabled(self, name: str) -> bool:
        """State of a gate.

        Raises:
            KeyError: if the gate is unknown
        """
        if name not in self._gates:
            raise KeyError(f"unknown feature gate {name!r}")
        return self._gates[name]

    def disable(self, name: str) -> None:
        """Turn a gate off. Unknown gates are ignored."""
        if name in self._gates:
            self._gates[name] = False

    def as_dict(self) -> Dict[str, bool]:
        return dict(self._gates)
