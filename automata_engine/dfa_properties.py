from typing import Dict, Hashable, Sequence, Tuple
from collections import deque

from .automaton_model import BLANK, DFA_REQUIRED_KEYS


def validate_dfa_structure(dfa: Dict) -> Dict:
    """
    Validates that a DFA is structurally well formed.

    Checks run in order and stop at the first failure:
    1. All required keys are present
    2. states is a list without duplicates
    3. alphabet is a list without duplicates (and without the blank symbol)
    4. transitions is total: every state has a target in states for every symbol
    5. start_state is one of the states
    6. every accepting state is one of the states

    Args:
        dfa: A dictionary representing the DFA with the following keys:
            - states: List of all states
            - alphabet: List of symbols in the alphabet
            - transitions: Dictionary of transitions, state -> symbol -> state
            - start_state: The starting state
            - accept_states: List of accepting states

    Returns:
        Dict: Validation result with 'valid' boolean and, when invalid, an 'error' message
    """
    if not isinstance(dfa, dict):
        return {'valid': False, 'error': 'DFA must be a dictionary'}

    # Check all required keys exist
    for key in DFA_REQUIRED_KEYS:
        if key not in dfa:
            return {'valid': False, 'error': f'Missing required key: {key}'}

    states = dfa['states']
    if not isinstance(states, (list, tuple)):
        return {'valid': False, 'error': 'states must be a list'}
    if not _all_hashable(states):
        return {'valid': False, 'error': 'states must be hashable values'}
    if len(set(states)) != len(states):
        return {'valid': False, 'error': 'states must not contain duplicates'}

    alphabet = dfa['alphabet']
    if not isinstance(alphabet, (list, tuple)):
        return {'valid': False, 'error': 'alphabet must be a list'}
    if not _all_hashable(alphabet):
        return {'valid': False, 'error': 'alphabet must be hashable values'}
    if len(set(alphabet)) != len(alphabet):
        return {'valid': False, 'error': 'alphabet must not contain duplicates'}
    if BLANK in alphabet:
        return {'valid': False, 'error': 'alphabet must not contain the blank symbol'}

    transitions = dfa['transitions']
    if not isinstance(transitions, dict):
        return {'valid': False, 'error': 'transitions must be a dictionary'}

    state_set = set(states)
    for state in states:
        if not isinstance(transitions.get(state), dict):
            return {'valid': False, 'error': f'No transitions defined for state {state}'}

        for symbol in alphabet:
            if symbol not in transitions[state]:
                return {'valid': False, 'error': f"Missing transition for symbol '{symbol}' from state {state}"}

            target = transitions[state][symbol]
            if not _is_hashable(target) or target not in state_set:
                return {'valid': False, 'error': f"Transition from state {state} on '{symbol}' leads to unknown state {target}"}

    if not _is_hashable(dfa['start_state']) or dfa['start_state'] not in state_set:
        return {'valid': False, 'error': 'Start state not in states list'}

    accept_states = dfa['accept_states']
    if not isinstance(accept_states, (list, tuple, set, frozenset)):
        return {'valid': False, 'error': 'accept_states must be a list'}
    for state in accept_states:
        if not _is_hashable(state) or state not in state_set:
            return {'valid': False, 'error': f'Accepting state {state} not in states list'}

    return {'valid': True}


def validate_dfa(dfa: Dict) -> bool:
    """
    Checks whether a DFA is well formed. Never raises.

    A DFA that fails this check must not be handed to is_empty_language
    or dfa_to_tm.
    """
    return validate_dfa_structure(dfa)['valid']


def require_valid_dfa(dfa: Dict) -> None:
    validation = validate_dfa_structure(dfa)
    if not validation['valid']:
        raise ValueError(f"Invalid DFA structure: {validation.get('error', 'Unknown error')}")


def transition_table(dfa: Dict) -> Dict[Tuple[Hashable, Hashable], Hashable]:
    """
    Flattens a validated DFA's nested transitions into a (state, symbol) -> state map.
    """
    return {
        (state, symbol): dfa['transitions'][state][symbol]
        for state in dfa['states']
        for symbol in dfa['alphabet']
    }


def is_empty_language(dfa: Dict) -> bool:
    """
    Checks if the language accepted by the DFA is empty.

    The language is empty exactly when no accepting state is reachable from
    the start state. States are explored breadth first and the search stops
    at the first accepting state found.

    Args:
        dfa: A dictionary representing a valid DFA

    Returns:
        bool: True if the DFA accepts no string at all, False otherwise

    Raises:
        ValueError: If the DFA is not well formed
    """
    require_valid_dfa(dfa)

    table = transition_table(dfa)
    accepting = set(dfa['accept_states'])

    visited = {dfa['start_state']}
    queue = deque([dfa['start_state']])

    while queue:
        current_state = queue.popleft()

        if current_state in accepting:
            return False

        for symbol in dfa['alphabet']:
            next_state = table[(current_state, symbol)]
            if next_state not in visited:
                visited.add(next_state)
                queue.append(next_state)

    return True


def dfa_accepts(dfa: Dict, input_symbols: Sequence) -> bool:
    """
    Runs a valid DFA directly over the input and reports membership.

    Symbols outside the alphabet reject the input.
    """
    table = transition_table(dfa)
    current_state = dfa['start_state']

    for symbol in input_symbols:
        if (current_state, symbol) not in table:
            return False
        current_state = table[(current_state, symbol)]

    return current_state in set(dfa['accept_states'])


def _is_hashable(value) -> bool:
    try:
        hash(value)
    except TypeError:
        return False
    return True


def _all_hashable(values) -> bool:
    return all(_is_hashable(value) for value in values)
