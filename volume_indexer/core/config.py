# volume_indexer/core/config.py

import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import msgspec
import yaml
from dotenv import load_dotenv

from ..types.configs.config import IndexerConfig
from ..types.configs.pool import RegistryConfig
from .logging import IndexerLogger, log_with_context, INFO

DEFAULT_DB_URL = "sqlite:///volume_indexer.db"

ENV_DB_URL = "VOLUME_INDEXER_DB_URL"
ENV_LOG_LEVEL = "LOG_LEVEL"
ENV_LOG_DIR = "VOLUME_INDEXER_LOG_DIR"


def _read_yaml(path: Path) -> Dict[str, Any]:
    with open(path, 'r') as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping at the top of {path}")
    return data


def load_config(config_path: Optional[Union[str, Path]] = None,
                env_vars: Optional[Dict[str, str]] = None) -> IndexerConfig:
    """Build IndexerConfig from an optional YAML file plus environment overrides"""
    load_dotenv()
    env = env_vars if env_vars is not None else os.environ

    data: Dict[str, Any] = {}
    if config_path:
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        data = _read_yaml(config_path)

    database = dict(data.get('database') or {})
    if env.get(ENV_DB_URL):
        database['url'] = env[ENV_DB_URL]
    database.setdefault('url', DEFAULT_DB_URL)
    data['database'] = database

    logging_section = dict(data.get('logging') or {})
    if env.get(ENV_LOG_LEVEL):
        logging_section['level'] = env[ENV_LOG_LEVEL].upper()
    if env.get(ENV_LOG_DIR):
        logging_section['log_dir'] = env[ENV_LOG_DIR]
        logging_section.setdefault('file', True)
    data['logging'] = logging_section

    config = msgspec.convert(data, type=IndexerConfig, strict=False)

    logger = IndexerLogger.get_logger('core.config')
    log_with_context(logger, INFO, "Configuration loaded",
                     config_path=str(config_path) if config_path else None,
                     db_backend=config.database.url.split(':', 1)[0],
                     rebasing_exceptions=len(config.processing.rebasing_factory_metapools))
    return config


def load_registry(registry_path: Union[str, Path]) -> RegistryConfig:
    """Decode a YAML pool registry file"""
    registry_path = Path(registry_path)
    if not registry_path.exists():
        raise FileNotFoundError(f"Registry file not found: {registry_path}")
    return msgspec.convert(_read_yaml(registry_path), type=RegistryConfig, strict=False)


def configure_logging(config: IndexerConfig, verbose: bool = False) -> None:
    log_dir = Path(config.logging.log_dir) if config.logging.log_dir else None
    IndexerLogger.reset()
    IndexerLogger.configure(
        log_dir=log_dir,
        log_level="DEBUG" if verbose else config.logging.level,
        console_enabled=config.logging.console,
        file_enabled=config.logging.file,
        structured_format=config.logging.structured,
    )
