"""Random task names of the form <Adjective><Noun><Number>."""

import random
from typing import Optional

ADJECTIVES = ("Quick", "Lazy", "Sleepy", "Noisy", "Hungry")
NOUNS = ("Fox", "Dog", "Cat", "Mouse", "Bear")
NUMBER_RANGE = 1000

_rng = random.Random()


def generate_task_name(rng: Optional[random.Random] = None) -> str:
    """
    Generate a task name such as ``SleepyCat412``.

    Names are not unique; two calls may return the same value.

    Args:
        rng: Optional random generator, defaults to a process-local one

    Returns:
        Task name
    """
    rng = rng or _rng
    adjective = rng.choice(ADJECTIVES)
    noun = rng.choice(NOUNS)
    number = rng.randrange(NUMBER_RANGE)
    return f"{adjective}{noun}{number}"
