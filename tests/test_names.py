import random
import re

from task_spammer.names import ADJECTIVES, NOUNS, generate_task_name

NAME_RE = re.compile(r"^(%s)(%s)(\d{1,3})$" % ("|".join(ADJECTIVES), "|".join(NOUNS)))


def test_names_match_pattern():
    for _ in range(500):
        name = generate_task_name()
        match = NAME_RE.match(name)
        assert match, name
        assert 0 <= int(match.group(3)) < 1000


def test_fixed_word_sets():
    assert ADJECTIVES == ("Quick", "Lazy", "Sleepy", "Noisy", "Hungry")
    assert NOUNS == ("Fox", "Dog", "Cat", "Mouse", "Bear")


def test_seeded_generator_is_reproducible():
    first = [generate_task_name(random.Random(42)) for _ in range(3)]
    second = [generate_task_name(random.Random(42)) for _ in range(3)]
    assert first == second


def test_all_words_eventually_drawn():
    rng = random.Random(1)
    seen = {NAME_RE.match(generate_task_name(rng)).group(1, 2) for _ in range(2000)}
    assert {a for a, _ in seen} == set(ADJECTIVES)
    assert {n for _, n in seen} == set(NOUNS)
