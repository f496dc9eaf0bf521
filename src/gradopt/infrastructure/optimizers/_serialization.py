"""
Configuration registry for optimizers.

Registered optimizer classes can be turned into JSON-serializable
configuration nodes and rebuilt from them. Only hyperparameters are
captured; optimizer state is not serialized.

Node format
-----------
{
  "type": "Adam",
  "config": {"step_size": 0.001, ...}
}
"""

from __future__ import annotations

import dataclasses
from typing import Any, Callable, Dict, Optional, Type

_OPTIMIZER_REGISTRY: dict[str, Type[Any]] = {}

# Dataclass fields that describe runtime state rather than configuration.
_NON_CONFIG_FIELDS = frozenset({"param_count", "state"})


def register_optimizer(name: Optional[str] = None) -> Callable[[Type[Any]], Type[Any]]:
    """
    Decorator to register an optimizer class for config round-trips.
    """

    def deco(cls: Type[Any]) -> Type[Any]:
        key = name or cls.__name__
        _OPTIMIZER_REGISTRY[key] = cls
        return cls

    return deco


def registered_optimizers() -> Dict[str, Type[Any]]:
    """Return a copy of the registry."""
    return dict(_OPTIMIZER_REGISTRY)


class ConfigMixin:
    """
    Default `get_config` / `from_config` for dataclass optimizers.

    The configuration is every dataclass field except the runtime fields
    (``param_count``, ``state``).
    """

    def get_config(self) -> Dict[str, Any]:
        """
        Return a JSON-serializable configuration dictionary.
        """
        return {
            f.name: getattr(self, f.name)
            for f in dataclasses.fields(self)  # type: ignore[arg-type]
            if f.name not in _NON_CONFIG_FIELDS
        }

    @classmethod
    def from_config(cls, cfg: Dict[str, Any]) -> Any:
        """
        Reconstruct an optimizer from a configuration dictionary.

        Unknown keys raise ``TypeError`` from the constructor.
        """
        return cls(**cfg)


def _registered_name(opt: Any) -> str:
    for key, cls in _OPTIMIZER_REGISTRY.items():
        if type(opt) is cls:
            return key
    raise ValueError(
        f"Optimizer type '{type(opt).__name__}' is not registered. "
        "Register it via @register_optimizer."
    )


def optimizer_to_config(opt: Any) -> dict[str, Any]:
    """
    Convert a registered optimizer into a configuration node.
    """
    return {"type": _registered_name(opt), "config": dict(opt.get_config())}


def optimizer_from_config(node: dict[str, Any]) -> Any:
    """
    Rebuild an optimizer from a configuration node.

    The rebuilt optimizer is uninitialized; stateful optimizers need
    ``initialize_with`` before stepping.
    """
    type_name = str(node["type"])
    if type_name not in _OPTIMIZER_REGISTRY:
        raise ValueError(
            f"Unknown optimizer type '{type_name}'. "
            "Register it via @register_optimizer."
        )

    cls = _OPTIMIZER_REGISTRY[type_name]
    cfg = node.get("config", {}) or {}
    return cls.from_config(cfg)
