"""
common.settings

Load the build configuration: compiler version, optimizer flags and the
deploy networks. Credentials are ${VAR} templates in config.yaml and are
filled in from the environment at load time.
"""
from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

from pydantic import BaseModel, field_validator, model_validator, ValidationError

log = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[1] / "config.yaml"

# the in-process network the toolchain always provides
BUILTIN_NETWORK = "hardhat"

# what an unset variable expands to, same as string interpolation of a missing value
MISSING_PLACEHOLDER = "undefined"

_TEMPLATE = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)\}")
_VERSION = re.compile(r"^\d+\.\d+\.\d+$")


class Optimizer(BaseModel):
    enabled: bool = True
    runs: int = 200

    model_config = {"frozen": True}


class SolcSettings(BaseModel):
    optimizer: Optimizer = Optimizer()

    model_config = {"frozen": True}


class Solidity(BaseModel):
    version: str
    settings: SolcSettings = SolcSettings()

    model_config = {"frozen": True}

    @field_validator("version")
    @classmethod
    def must_be_semver(cls, v: str) -> str:
        if not _VERSION.match(v):
            raise ValueError(f"solidity version must look like X.Y.Z, got {v!r}")
        return v


class Network(BaseModel):
    url: str
    accounts: Tuple[str, ...] = ()

    model_config = {"frozen": True}

    @field_validator("url")
    @classmethod
    def must_be_http(cls, v: str) -> str:
        if v.startswith(MISSING_PLACEHOLDER):
            # URL came from an unset variable, fails when the network is used
            return v
        if not v.startswith(("https://", "http://")):
            raise ValueError("network URL must be http(s)")
        return v


class BuildConfig(BaseModel):
    default_network: str = BUILTIN_NETWORK
    solidity: Solidity
    networks: Dict[str, Network] = {}
    missing_env: Tuple[str, ...] = ()

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def default_network_is_known(self) -> "BuildConfig":
        if self.default_network != BUILTIN_NETWORK and self.default_network not in self.networks:
            raise ValueError(f"default_network {self.default_network!r} is not a declared network")
        return self

    def network(self, name: str) -> Network:
        try:
            return self.networks[name]
        except KeyError:
            raise KeyError(f"unknown network {name!r}") from None

    def solc_settings(self) -> Dict[str, Any]:
        """Settings block for a solc standard-JSON input."""
        return self.solidity.settings.model_dump()


def process_env(dotenv_path: Optional[str] = None) -> Dict[str, str]:
    """
    Environment used for interpolation: .env values overlaid by the real
    process environment, which wins on conflicts. Only ./.env is read,
    parent directories are not searched.
    """
    from dotenv import dotenv_values

    path = dotenv_path or ".env"
    file_values = {}
    if os.path.isfile(path):
        file_values = {k: v for k, v in dotenv_values(path).items() if v is not None}
    return {**file_values, **os.environ}


def interpolate(value: Any, env: Mapping[str, str], missing: List[str]) -> Any:
    """Expand ${VAR} in every string of a parsed YAML tree."""
    if isinstance(value, dict):
        return {k: interpolate(v, env, missing) for k, v in value.items()}
    if isinstance(value, list):
        return [interpolate(v, env, missing) for v in value]
    if not isinstance(value, str):
        return value

    def _sub(m: re.Match) -> str:
        name = m.group(1)
        if name in env:
            return env[name]
        if name not in missing:
            missing.append(name)
            log.warning("environment variable %s is not set, using %r", name, MISSING_PLACEHOLDER)
        return MISSING_PLACEHOLDER

    return _TEMPLATE.sub(_sub, value)


def load_config(path: Optional[str] = None, env: Optional[Mapping[str, str]] = None) -> BuildConfig:
    import yaml

    cfg_path = str(path or DEFAULT_CONFIG_PATH)
    if env is None:
        env = process_env()

    try:
        with open(cfg_path, "r") as f:
            raw = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise RuntimeError(f"Configuration error in {cfg_path}: {e}") from e
    if not isinstance(raw, dict):
        raise RuntimeError(f"Configuration error in {cfg_path}: top level must be a mapping")

    missing: List[str] = []
    cfg = interpolate(raw, env, missing)
    cfg["missing_env"] = missing

    try:
        return BuildConfig.model_validate(cfg)
    except ValidationError as e:
        raise RuntimeError(f"Configuration error in {cfg_path}: {e}") from e


_config: Optional[BuildConfig] = None


def get_config() -> BuildConfig:
    global _config
    if _config is None:
        _config = load_config()
    return _config
