from typing import Dict

from .automaton_model import (
    ACCEPT_STATE,
    BLANK,
    HALTING_STATES,
    REJECT_STATE,
    Move,
    TMAction,
    TuringMachine
)
from .dfa_properties import require_valid_dfa, transition_table


def dfa_to_tm(dfa: Dict) -> TuringMachine:
    """
    Converts a deterministic finite automaton into an equivalent Turing machine.

    Every DFA state q becomes the TM state str(q), and two halting states,
    ACCEPT and REJECT, are added. The machine reads the input left to right
    without changing it:
    - on an input symbol it rewrites the same symbol, moves right and goes to
      the DFA successor state
    - on the blank symbol (end of input) it stays put and halts in ACCEPT if q
      is accepting, REJECT otherwise

    A run on a string of length n therefore halts after exactly n + 1 steps,
    in ACCEPT exactly when the DFA accepts the string.

    Args:
        dfa (Dict): A dictionary representing a valid DFA.

    Returns:
        TuringMachine: The compiled machine.

    Raises:
        ValueError: If the DFA is not well formed, or its state names clash
            once converted to strings.
    """
    require_valid_dfa(dfa)

    state_names = {}
    for state in dfa['states']:
        name = str(state)
        if name in HALTING_STATES:
            raise ValueError(f"State name '{name}' is reserved for a halting state")
        if name in state_names.values():
            raise ValueError(f"States are not distinguishable by name: '{name}'")
        state_names[state] = name

    table = transition_table(dfa)
    accepting = set(dfa['accept_states'])

    transitions = {}
    for state in dfa['states']:
        name = state_names[state]
        for symbol in dfa['alphabet']:
            next_state = state_names[table[(state, symbol)]]
            transitions[(name, symbol)] = TMAction(symbol, Move.RIGHT, next_state)

        # End of input: decide on the current state alone
        verdict_state = ACCEPT_STATE if state in accepting else REJECT_STATE
        transitions[(name, BLANK)] = TMAction(BLANK, Move.STAY, verdict_state)

    return TuringMachine(
        states=tuple(state_names[state] for state in dfa['states']) + (ACCEPT_STATE, REJECT_STATE),
        tape_alphabet=tuple(dfa['alphabet']) + (BLANK,),
        transitions=transitions,
        start_state=state_names[dfa['start_state']]
    )
