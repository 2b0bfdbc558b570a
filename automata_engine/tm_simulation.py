import logging
from typing import Dict, Hashable, Iterator, List, Sequence, Tuple

from .automaton_model import (
    ACCEPT_STATE,
    REJECT_STATE,
    Move,
    TuringMachine,
    Verdict,
    render_symbol
)

logger = logging.getLogger(__name__)

DEFAULT_MAX_STEPS = 1000


def simulate_tm(tm: TuringMachine, input_symbols: Sequence, max_steps: int = DEFAULT_MAX_STEPS) -> Dict:
    """
    Runs a Turing machine on the given input until it halts or the step bound is reached.

    Args:
        tm: The machine to run
        input_symbols: The input, either a string (one symbol per character)
            or a list/tuple of symbols. Must not contain the blank symbol.
        max_steps: Maximum number of transitions to apply (0 is allowed)

    Returns:
        A dictionary with:
        {
            'verdict': Verdict,  # ACCEPT, REJECT or TIMEOUT
            'step_count': int,  # Steps taken, a failed transition lookup included
            'final_tape': [...],  # Tape contents when the run stopped
            'trace': [...],  # One entry per configuration, step 0 first
            'reason': str  # Why the run stopped
        }

    Raises:
        TypeError: If tm is not a TuringMachine or the input is not a string or sequence
        ValueError: If the input contains the blank symbol or max_steps is invalid
    """
    trace = []
    for event in simulate_tm_generator(tm, input_symbols, max_steps):
        if event['type'] == 'step':
            trace.append({key: value for key, value in event.items() if key != 'type'})
        else:
            return {
                'verdict': event['verdict'],
                'step_count': event['step_count'],
                'final_tape': event['final_tape'],
                'trace': trace,
                'reason': event['reason']
            }

    raise RuntimeError('Simulation ended without a verdict')


def simulate_tm_generator(tm: TuringMachine, input_symbols: Sequence,
                          max_steps: int = DEFAULT_MAX_STEPS) -> Iterator[Dict]:
    """
    Generator version of simulate_tm that yields each configuration as it is reached.

    Arguments are checked before the generator is returned, so bad input
    fails at the call rather than on the first iteration.

    Yields:
        - For every configuration: {'type': 'step', 'step': int, 'state': str,
          'tape': str, 'head': int, 'symbol': str}, where tape is the visible
          window, head the head's offset inside it and symbol the cell under the head
        - Once, at the end: {'type': 'halt', 'verdict': Verdict, 'step_count': int,
          'final_tape': [...], 'reason': str}
    """
    if not isinstance(tm, TuringMachine):
        raise TypeError('simulate_tm: missing TM object')
    if not isinstance(input_symbols, (str, list, tuple)):
        raise TypeError('simulate_tm: input must be a string or a sequence of symbols')
    if not isinstance(input_symbols, str) and tm.blank in input_symbols:
        raise ValueError('simulate_tm: input must not contain the blank symbol')
    if isinstance(max_steps, bool) or not isinstance(max_steps, int) or max_steps < 0:
        raise ValueError('simulate_tm: max_steps must be a non-negative integer')

    return _run(tm, input_symbols, max_steps)


def _run(tm: TuringMachine, input_symbols: Sequence, max_steps: int) -> Iterator[Dict]:
    tape: List[Hashable] = list(input_symbols) if len(input_symbols) else [tm.blank]
    head = 0
    state = tm.start_state
    step_count = 0

    logger.debug('Starting TM run in state %s on %r', state, input_symbols)
    yield _step_event(step_count, state, tape, head, tm.blank)

    while True:
        if state == ACCEPT_STATE:
            verdict, reason = Verdict.ACCEPT, f'Halted in {ACCEPT_STATE}'
            break
        if state == REJECT_STATE:
            verdict, reason = Verdict.REJECT, f'Halted in {REJECT_STATE}'
            break
        if step_count >= max_steps:
            verdict, reason = Verdict.TIMEOUT, f'Max steps ({max_steps}) exceeded'
            break

        symbol = tape[head] if head < len(tape) else tm.blank
        action = tm.transition_for(state, symbol)
        if action is None:
            # An undefined transition is an implicit reject; the failed step still counts
            step_count += 1
            verdict = Verdict.REJECT
            reason = f"No transition for state {state} on symbol '{render_symbol(symbol)}'"
            break

        if head >= len(tape):
            tape.append(tm.blank)
        tape[head] = action.write

        if action.move == Move.RIGHT:
            head += 1
            if head >= len(tape):
                tape.append(tm.blank)
        elif action.move == Move.LEFT:
            head = max(0, head - 1)

        state = action.next_state
        step_count += 1

        event = _step_event(step_count, state, tape, head, tm.blank)
        logger.debug('Step %d: state=%s tape=%s head=%d', step_count, state, event['tape'], event['head'])
        yield event

    logger.info('TM halted with %s after %d steps: %s', verdict.value, step_count, reason)
    yield {
        'type': 'halt',
        'verdict': verdict,
        'step_count': step_count,
        'final_tape': list(tape),
        'reason': reason
    }


def tape_snapshot(tape: Sequence, head: int, blank) -> Tuple[str, int]:
    """
    Renders the interesting part of the tape.

    Leading and trailing blanks are trimmed, but the window always covers
    the head. Returns the rendered window and the head's offset inside it.
    """
    left, right = 0, len(tape) - 1
    while left < len(tape) and tape[left] is blank:
        left += 1
    while right >= 0 and tape[right] is blank:
        right -= 1
    if left > right:
        left = right = 0
    left = min(left, head)
    right = max(right, head)

    window = [tape[i] if i < len(tape) else blank for i in range(left, right + 1)]
    return ''.join(render_symbol(symbol) for symbol in window), head - left


def _step_event(step: int, state: str, tape: Sequence, head: int, blank) -> Dict:
    window, offset = tape_snapshot(tape, head, blank)
    return {
        'type': 'step',
        'step': step,
        'state': state,
        'tape': window,
        'head': offset,
        'symbol': render_symbol(tape[head] if head < len(tape) else blank)
    }
