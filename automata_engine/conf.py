from django.conf import settings

from .tm_simulation import DEFAULT_MAX_STEPS


def default_max_steps() -> int:
    """Step bound used when a request does not ask for one."""
    return getattr(settings, 'AUTOMATA_ENGINE_DEFAULT_MAX_STEPS', DEFAULT_MAX_STEPS)


def max_steps_limit() -> int:
    """Largest step bound a request may ask for."""
    return getattr(settings, 'AUTOMATA_ENGINE_MAX_STEPS_LIMIT', 100000)
