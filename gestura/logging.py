"""
Gestura Logging

Leveled console messages per module, plus structured records of every
interaction the InputHandler runs.

Usage:
    from gestura.logging import get_logger

    log = get_logger('agent')
    log.trace("poll: no event")
    log.warning("grabber is not in the pool")
    log.dispatch(tick, event, grabber)   # only with dispatch tracing on

Dispatch records:
    InputHandler.handle() emits one record per executed tuple to the
    'dispatch' sink. Without a registered sink the sink is created from
    the environment on first use: a FileSink writing
    <log dir>/<session>_dispatch.jsonl when GESTURA_LOGGING_DISPATCH_ENABLED
    is true, a NullSink otherwise.

Environment:
    GESTURA_LOG_LEVEL=DEBUG                 # Default level
    GESTURA_LOG_<MODULE>=TRACE              # Level of one module, e.g. GESTURA_LOG_AGENT
    GESTURA_LOG_DISPATCH=1                  # Print every interaction as it runs
    GESTURA_LOG_DIR=/tmp/gestura            # Directory for record files
    GESTURA_LOGGING_DISPATCH_ENABLED=true   # Write dispatch records
    GESTURA_LOGGING_DISPATCH_DIR=/tmp/x     # Directory for dispatch records only
"""

import json
import os
import time
from abc import ABC, abstractmethod
from enum import IntEnum
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional


class LogLevel(IntEnum):
    TRACE = 5
    DEBUG = 10
    INFO = 20
    WARNING = 30
    OFF = 100


_config: Dict[str, Any] = {
    'default_level': LogLevel.INFO,
    'module_levels': {},
    'dispatch': False,
    'log_dir': None,
    'modules': {},      # record module -> settings, e.g. {'dispatch': {'enabled': True}}
}


# =============================================================================
# Record sinks
# =============================================================================

class LogSink(ABC):
    """Destination of structured records."""

    @abstractmethod
    def emit(self, module: str, record: Dict[str, Any]) -> None:
        pass

    def flush(self) -> None:
        pass

    def close(self) -> None:
        pass


class FileSink(LogSink):
    """Appends records as JSON lines, one file per record module.

    Args:
        log_dir: Target directory (default: get_log_dir())
        session_name: File name prefix (default: start time)
    """

    def __init__(self, log_dir: Optional[str] = None, session_name: Optional[str] = None):
        self.log_dir = Path(log_dir or get_log_dir()).expanduser()
        self.session_name = session_name or time.strftime("%Y%m%d_%H%M%S")
        self._files: Dict[str, Any] = {}

    def path(self, module: str) -> Path:
        return self.log_dir / f"{self.session_name}_{module}.jsonl"

    def emit(self, module: str, record: Dict[str, Any]) -> None:
        f = self._files.get(module)
        if f is None:
            self.log_dir.mkdir(parents=True, exist_ok=True)
            f = self._files[module] = open(self.path(module), 'a')
        f.write(json.dumps(record) + "\n")

    def flush(self) -> None:
        for f in self._files.values():
            f.flush()

    def close(self) -> None:
        for f in self._files.values():
            f.close()
        self._files.clear()


class NullSink(LogSink):
    """Discards records."""

    def emit(self, module: str, record: Dict[str, Any]) -> None:
        pass


_sinks: Dict[str, LogSink] = {}


def register_sink(module: str, sink: LogSink) -> None:
    _sinks[module] = sink


def get_sink(module: str) -> Optional[LogSink]:
    return _sinks.get(module)


def emit_record(module: str, record: Dict[str, Any]) -> bool:
    """Send a record to the module's sink.

    Returns:
        False if no sink is registered for the module
    """
    sink = _sinks.get(module)
    if sink is None:
        return False
    sink.emit(module, record)
    return True


def close_all_sinks() -> None:
    """Close and unregister every sink."""
    for sink in _sinks.values():
        sink.close()
    _sinks.clear()


def get_log_dir() -> str:
    """Record directory: configured log_dir, then GESTURA_LOG_DIR, then ~/.gestura/logs."""
    if _config['log_dir']:
        return str(Path(_config['log_dir']).expanduser())
    env_dir = os.environ.get('GESTURA_LOG_DIR')
    if env_dir:
        return str(Path(env_dir).expanduser())
    return str(Path.home() / '.gestura' / 'logs')


def _parse_env_value(value: str) -> Any:
    lower = value.lower()
    if lower in ('true', '1', 'yes', 'on'):
        return True
    if lower in ('false', '0', 'no', 'off'):
        return False
    return value


def get_module_config(module: str) -> Dict[str, Any]:
    """Settings of a record module.

    Programmatic settings are overlaid with GESTURA_LOGGING_<MODULE>_<SETTING>
    variables, read at call time.
    """
    config = dict(_config['modules'].get(module, {}))
    prefix = f"GESTURA_LOGGING_{module.upper()}_"
    for key, value in os.environ.items():
        if key.startswith(prefix):
            config[key[len(prefix):].lower()] = _parse_env_value(value)
    return config


def create_sink_for_environment(module: str, session_name: Optional[str] = None) -> LogSink:
    """FileSink if the module's records are enabled, NullSink otherwise."""
    config = get_module_config(module)
    if not config.get('enabled', False):
        return NullSink()
    return FileSink(log_dir=config.get('dir'), session_name=session_name)


# =============================================================================
# Levels
# =============================================================================

def _level_from_string(name: str) -> LogLevel:
    name = name.upper()
    if name == 'WARN':
        return LogLevel.WARNING
    return LogLevel.__members__.get(name, LogLevel.INFO)


def configure_logging(
    level: str = 'INFO',
    modules: Optional[Dict[str, str]] = None,
    dispatch: bool = False,
    log_dir: Optional[str] = None,
    records: Optional[Dict[str, Dict[str, Any]]] = None,
) -> None:
    """
    Configure logging programmatically.

    Args:
        level: Default level
        modules: Module name -> level
        dispatch: Print every interaction as it runs (at DEBUG)
        log_dir: Directory for record files
        records: Record module -> settings, e.g. {'dispatch': {'enabled': True}}
    """
    _config['default_level'] = _level_from_string(level)
    for module, module_level in (modules or {}).items():
        _config['module_levels'][module] = _level_from_string(module_level)
    _config['dispatch'] = dispatch
    if log_dir is not None:
        _config['log_dir'] = log_dir
    for module, settings in (records or {}).items():
        _config['modules'].setdefault(module, {}).update(settings)


def disable_logging() -> None:
    _config['default_level'] = LogLevel.OFF
    _config['module_levels'].clear()
    _config['dispatch'] = False


def _load_env_levels() -> None:
    prefix = 'GESTURA_LOG_'
    for key, value in os.environ.items():
        if not key.startswith(prefix):
            continue
        name = key[len(prefix):]
        if name == 'LEVEL':
            _config['default_level'] = _level_from_string(value)
        elif name == 'DISPATCH':
            _config['dispatch'] = _parse_env_value(value) is True
        elif name != 'DIR':
            _config['module_levels'][name.lower()] = _level_from_string(value)


_load_env_levels()


# =============================================================================
# Loggers
# =============================================================================

class GesturaLogger:
    """Console logger of one module, printing ``[module] LEVEL: message``."""

    def __init__(self, module: str):
        self.module = module

    @property
    def level(self) -> LogLevel:
        return _config['module_levels'].get(self.module, _config['default_level'])

    def _log(self, level: LogLevel, label: str, msg: str, *args) -> None:
        if level < self.level:
            return
        if args:
            try:
                msg = msg % args
            except (TypeError, ValueError):
                msg = f"{msg} {args}"
        print(f"[{self.module}] {label}: {msg}")

    def trace(self, msg: str, *args) -> None:
        self._log(LogLevel.TRACE, 'TRACE', msg, *args)

    def debug(self, msg: str, *args) -> None:
        self._log(LogLevel.DEBUG, 'DEBUG', msg, *args)

    def info(self, msg: str, *args) -> None:
        self._log(LogLevel.INFO, 'INFO', msg, *args)

    def warning(self, msg: str, *args) -> None:
        self._log(LogLevel.WARNING, 'WARN', msg, *args)

    def dispatch(self, tick: int, event: Any, grabber: Any) -> None:
        """Print an interaction about to run, when dispatch tracing is on."""
        if _config['dispatch']:
            self._log(LogLevel.DEBUG, 'DISPATCH',
                      f"tick {tick}: {event} -> {type(grabber).__name__}")


@lru_cache(maxsize=64)
def get_logger(module: str) -> GesturaLogger:
    """Cached logger for a module."""
    return GesturaLogger(module)
