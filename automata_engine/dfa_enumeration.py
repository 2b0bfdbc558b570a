from itertools import product
from typing import Dict, Iterator

ENUMERATION_STATES = [0, 1]
ENUMERATION_ALPHABET = ['a', 'b']


def enumerate_dfas() -> Iterator[Dict]:
    """
    Yields every DFA with states [0, 1] over the alphabet ['a', 'b'].

    That is 2^4 choices of transition targets, 2 start states and 4 sets of
    accepting states: 128 DFAs. Each call returns a fresh iterator and each
    yielded DFA is a new dictionary, so callers may modify what they receive.
    """
    targets = ENUMERATION_STATES
    for q0a, q0b, q1a, q1b in product(targets, repeat=4):
        for start_state in ENUMERATION_STATES:
            for accept0, accept1 in product([False, True], repeat=2):
                accept_states = []
                if accept0:
                    accept_states.append(0)
                if accept1:
                    accept_states.append(1)

                yield {
                    'states': list(ENUMERATION_STATES),
                    'alphabet': list(ENUMERATION_ALPHABET),
                    'transitions': {
                        0: {'a': q0a, 'b': q0b},
                        1: {'a': q1a, 'b': q1b}
                    },
                    'start_state': start_state,
                    'accept_states': accept_states
                }
