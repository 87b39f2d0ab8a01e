"""Select the presentation definition match strategy from settings."""

import logging

from ..config.base import ConfigError, SettingsLike
from ..config.settings import Settings
from ..utils.classloader import ClassLoader, ClassNotFoundError, ModuleLoadError
from .match_strategy import BasePresentationDefinitionMatchStrategy

LOGGER = logging.getLogger(__name__)

MATCH_STRATEGY_SETTING = "match.strategy"
DEFAULT_MATCH_STRATEGY = "filter"
MATCH_STRATEGY_CLASSES = {
    "filter": (
        "vc_matcher.exchange.match_strategy."
        "FilterPresentationDefinitionMatchStrategy"
    ),
    "dif": (
        "vc_matcher.exchange.dif_match_strategy."
        "DIFPresentationDefinitionMatchStrategy"
    ),
}


def get_match_strategy(
    settings: SettingsLike = None,
) -> BasePresentationDefinitionMatchStrategy:
    """
    Instantiate the configured match strategy.

    Args:
        settings: settings or a plain mapping; `match.strategy` holds a
            strategy name (`filter` or `dif`) or a strategy class path

    Returns:
        A new match strategy instance

    Raises:
        ConfigError: If the strategy cannot be loaded or is not a strategy

    """
    strategy = (
        Settings.coerce(settings).get_str(MATCH_STRATEGY_SETTING)
        or DEFAULT_MATCH_STRATEGY
    )
    class_path = MATCH_STRATEGY_CLASSES.get(strategy, strategy)
    if "." not in class_path:
        raise ConfigError(f"Unknown match strategy: {strategy}")

    try:
        strategy_cls = ClassLoader.load_class(class_path)
    except (ClassNotFoundError, ModuleLoadError) as err:
        raise ConfigError(
            f"Unable to load match strategy {strategy}: {err.roll_up}"
        ) from err
    if not issubclass(strategy_cls, BasePresentationDefinitionMatchStrategy):
        raise ConfigError(f"Not a presentation definition match strategy: {strategy}")

    LOGGER.debug("Using presentation definition match strategy %s", class_path)
    return strategy_cls()
