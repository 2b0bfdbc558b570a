from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Hashable, List, Mapping, NamedTuple, Optional, Tuple


ACCEPT_STATE = 'ACCEPT'
REJECT_STATE = 'REJECT'
HALTING_STATES = (ACCEPT_STATE, REJECT_STATE)

DFA_REQUIRED_KEYS = ['states', 'alphabet', 'transitions', 'start_state', 'accept_states']

# How a blank cell is drawn in trace windows
BLANK_DISPLAY = '_'


class _Blank:
    """
    The blank tape symbol.

    There is exactly one instance, BLANK. It compares equal only to itself,
    so it can never be mistaken for an input symbol, whatever the alphabet.
    """
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return 'BLANK'

    def __reduce__(self):
        return (_Blank, ())


BLANK = _Blank()


class Move(str, Enum):
    LEFT = 'L'
    RIGHT = 'R'
    STAY = 'S'

    @classmethod
    def _missing_(cls, value):
        # 'N' (no move) is also accepted for STAY
        if value == 'N':
            return cls.STAY
        return None


class Verdict(str, Enum):
    ACCEPT = 'ACCEPT'
    REJECT = 'REJECT'
    TIMEOUT = 'TIMEOUT'


class TMAction(NamedTuple):
    write: Hashable
    move: Move
    next_state: str


@dataclass(frozen=True)
class TuringMachine:
    """
    A single-tape deterministic Turing machine.

    Attributes:
        states: All state names, halting states included
        tape_alphabet: Input symbols plus BLANK
        transitions: Partial map (state, read_symbol) -> TMAction
        start_state: Name of the initial state
        blank: The blank symbol (always BLANK)
    """
    states: Tuple[str, ...]
    tape_alphabet: Tuple[Hashable, ...]
    transitions: Mapping[Tuple[str, Hashable], TMAction] = field(default_factory=dict, hash=False)
    start_state: str = ''
    blank: Any = BLANK

    def __post_init__(self):
        # Read-only copy, so the machine cannot change between runs
        object.__setattr__(self, 'transitions', MappingProxyType(dict(self.transitions)))

    def transition_for(self, state: str, symbol: Hashable) -> Optional[TMAction]:
        return self.transitions.get((state, symbol))

    def is_halting(self, state: str) -> bool:
        return state in HALTING_STATES


def encode_symbol(symbol: Hashable):
    """Blank cells become None in JSON-safe structures."""
    return None if symbol is BLANK else symbol


def decode_symbol(value):
    return BLANK if value is None else value


def render_symbol(symbol: Hashable) -> str:
    return BLANK_DISPLAY if symbol is BLANK else str(symbol)


def tm_to_dict(tm: TuringMachine) -> Dict:
    """
    Converts a TuringMachine into a JSON-safe dictionary.

    Transitions are grouped per state, the way FSA transitions are laid out:
        {state: [{'read': symbol, 'write': symbol, 'move': 'R', 'next_state': str}, ...]}
    The blank symbol is written as None.
    """
    transitions: Dict[str, List[Dict]] = {state: [] for state in tm.states}
    for (state, read), action in tm.transitions.items():
        transitions.setdefault(state, []).append({
            'read': encode_symbol(read),
            'write': encode_symbol(action.write),
            'move': action.move.value,
            'next_state': action.next_state
        })

    return {
        'states': list(tm.states),
        'tape_alphabet': [encode_symbol(symbol) for symbol in tm.tape_alphabet],
        'transitions': transitions,
        'start_state': tm.start_state
    }


def tm_from_dict(data: Dict) -> TuringMachine:
    """
    Builds a TuringMachine from the dictionary layout produced by tm_to_dict.

    Hand-authored machines may leave transitions out; a missing transition
    is read by the simulator as an implicit reject.

    Raises:
        ValueError: If the layout is malformed, references unknown states,
            or defines two transitions for the same (state, symbol) pair
    """
    if not isinstance(data, dict):
        raise ValueError('TM must be a dictionary')

    for key in ('states', 'transitions', 'start_state'):
        if key not in data:
            raise ValueError(f'Missing required key: {key}')

    if not isinstance(data['states'], list):
        raise ValueError('states must be a list')
    states = [str(state) for state in data['states']]
    for halting_state in HALTING_STATES:
        if halting_state not in states:
            states.append(halting_state)

    start_state = str(data['start_state'])
    if start_state not in states:
        raise ValueError(f'Start state {start_state} not in states list')

    if not isinstance(data['transitions'], dict):
        raise ValueError('transitions must be a dictionary')

    tape_alphabet = [decode_symbol(symbol) for symbol in data.get('tape_alphabet', [])]
    transitions = {}
    for state, rules in data['transitions'].items():
        if state not in states:
            raise ValueError(f'Transition from unknown state {state}')
        if not isinstance(rules, list):
            raise ValueError(f'Transitions for state {state} must be a list')

        for rule in rules:
            try:
                read = decode_symbol(rule['read'])
                write = decode_symbol(rule['write'])
                move = rule['move']
                next_state = str(rule['next_state'])
            except (KeyError, TypeError) as e:
                raise ValueError(f'Malformed transition for state {state}: {rule}') from e

            try:
                move = Move(move)
            except ValueError as e:
                raise ValueError(f"Unknown move {move!r} for state {state}, expected one of 'L', 'R', 'S' or 'N'") from e

            if next_state not in states:
                raise ValueError(f'Transition to unknown state {next_state}')
            if (state, read) in transitions:
                raise ValueError(f'Duplicate transition for state {state} on {render_symbol(read)}')

            transitions[(state, read)] = TMAction(write, move, next_state)
            for symbol in (read, write):
                if symbol not in tape_alphabet:
                    tape_alphabet.append(symbol)

    if BLANK not in tape_alphabet:
        tape_alphabet.append(BLANK)

    return TuringMachine(
        states=tuple(states),
        tape_alphabet=tuple(tape_alphabet),
        transitions=transitions,
        start_state=start_state
    )
