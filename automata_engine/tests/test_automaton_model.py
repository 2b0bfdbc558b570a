import copy
import json
import pickle
import unittest

from automata_engine.automaton_model import (
    BLANK,
    Move,
    TMAction,
    TuringMachine,
    Verdict,
    decode_symbol,
    encode_symbol,
    render_symbol,
    tm_from_dict,
    tm_to_dict
)
from automata_engine.dfa_transformations import dfa_to_tm
from automata_engine.tm_simulation import simulate_tm


class TestBlankSymbol(unittest.TestCase):
    def test_singleton(self):
        self.assertIs(copy.copy(BLANK), BLANK)
        self.assertIs(copy.deepcopy(BLANK), BLANK)
        self.assertIs(pickle.loads(pickle.dumps(BLANK)), BLANK)

    def test_distinct_from_input_symbols(self):
        """Test the blank never equals a string, number or None"""
        for symbol in ['_', '', ' ', 'BLANK', 0, None]:
            self.assertNotEqual(BLANK, symbol)

    def test_rendering(self):
        self.assertEqual(render_symbol(BLANK), '_')
        self.assertEqual(render_symbol('a'), 'a')
        self.assertEqual(render_symbol(3), '3')
        self.assertIsNone(encode_symbol(BLANK))
        self.assertIs(decode_symbol(None), BLANK)
        self.assertEqual(decode_symbol('a'), 'a')


class TestTmDictConversion(unittest.TestCase):
    def setUp(self):
        self.dfa = {
            'states': [0, 1],
            'alphabet': ['a', 'b'],
            'transitions': {
                0: {'a': 1, 'b': 0},
                1: {'a': 0, 'b': 1}
            },
            'start_state': 0,
            'accept_states': [1]
        }

    def test_to_dict_is_json_safe(self):
        data = tm_to_dict(dfa_to_tm(self.dfa))

        self.assertEqual(data['states'], ['0', '1', 'ACCEPT', 'REJECT'])
        self.assertEqual(data['tape_alphabet'], ['a', 'b', None])
        self.assertEqual(data['start_state'], '0')
        self.assertEqual(data['transitions']['ACCEPT'], [])
        self.assertIn(
            {'read': None, 'write': None, 'move': 'S', 'next_state': 'ACCEPT'},
            data['transitions']['1']
        )
        self.assertIn(
            {'read': 'a', 'write': 'a', 'move': 'R', 'next_state': '1'},
            data['transitions']['0']
        )

        # Must survive a JSON round trip unchanged
        self.assertEqual(json.loads(json.dumps(data)), data)

    def test_from_dict_rebuilds_same_machine(self):
        tm = dfa_to_tm(self.dfa)
        self.assertEqual(tm_from_dict(tm_to_dict(tm)), tm)

    def test_hand_authored_machine(self):
        """Test a partial machine without halting states or alphabet listed"""
        tm = tm_from_dict({
            'states': ['scan'],
            'transitions': {
                'scan': [
                    {'read': 'x', 'write': 'y', 'move': 'R', 'next_state': 'scan'},
                    {'read': None, 'write': None, 'move': 'L', 'next_state': 'ACCEPT'}
                ]
            },
            'start_state': 'scan'
        })

        self.assertEqual(tm.states, ('scan', 'ACCEPT', 'REJECT'))
        self.assertEqual(tm.transition_for('scan', 'x'), TMAction('y', Move.RIGHT, 'scan'))
        self.assertIn(BLANK, tm.tape_alphabet)
        self.assertTrue(tm.is_halting('ACCEPT'))
        self.assertFalse(tm.is_halting('scan'))

        result = simulate_tm(tm, 'xx')
        self.assertEqual(result['verdict'], Verdict.ACCEPT)
        self.assertEqual(result['final_tape'], ['y', 'y', BLANK])

    def test_from_dict_errors(self):
        """Test malformed layouts are refused with ValueError"""
        valid = {
            'states': ['q0'],
            'transitions': {'q0': [{'read': 'a', 'write': 'a', 'move': 'R', 'next_state': 'q0'}]},
            'start_state': 'q0'
        }
        self.assertIsInstance(tm_from_dict(valid), TuringMachine)

        broken = [
            None,
            {'states': ['q0'], 'start_state': 'q0'},
            {**valid, 'states': 'q0'},
            {**valid, 'start_state': 'q9'},
            {**valid, 'transitions': []},
            {**valid, 'transitions': {'q9': []}},
            {**valid, 'transitions': {'q0': {}}},
            {**valid, 'transitions': {'q0': [{'read': 'a'}]}},
            {**valid, 'transitions': {'q0': [{'read': 'a', 'write': 'a', 'move': 'UP', 'next_state': 'q0'}]}},
            {**valid, 'transitions': {'q0': [{'read': 'a', 'write': 'a', 'move': 'R', 'next_state': 'q9'}]}},
            {**valid, 'transitions': {'q0': [
                {'read': 'a', 'write': 'a', 'move': 'R', 'next_state': 'q0'},
                {'read': 'a', 'write': 'b', 'move': 'L', 'next_state': 'q0'}
            ]}},
        ]
        for data in broken:
            with self.assertRaises(ValueError, msg=data):
                tm_from_dict(data)

    def test_machine_is_frozen(self):
        tm = dfa_to_tm(self.dfa)
        with self.assertRaises(AttributeError):
            tm.start_state = '1'

    def test_transitions_are_read_only(self):
        """Test the transition map cannot be changed after construction"""
        tm = dfa_to_tm(self.dfa)
        with self.assertRaises(AttributeError):
            tm.transitions.clear()
        with self.assertRaises(TypeError):
            tm.transitions[('0', 'a')] = TMAction('a', Move.STAY, 'REJECT')

        self.assertEqual(simulate_tm(tm, 'a')['verdict'], Verdict.ACCEPT)
        self.assertEqual(hash(tm), hash(dfa_to_tm(self.dfa)))

    def test_source_map_changes_do_not_leak(self):
        transitions = {('q0', BLANK): TMAction(BLANK, Move.STAY, 'ACCEPT')}
        tm = TuringMachine(
            states=('q0', 'ACCEPT', 'REJECT'),
            tape_alphabet=(BLANK,),
            transitions=transitions,
            start_state='q0'
        )
        transitions.clear()

        self.assertEqual(len(tm.transitions), 1)
        self.assertEqual(simulate_tm(tm, '')['verdict'], Verdict.ACCEPT)

    def test_no_move_alias(self):
        """Test 'N' is accepted for a stay move"""
        self.assertIs(Move('N'), Move.STAY)

        tm = tm_from_dict({
            'states': ['q0'],
            'transitions': {'q0': [{'read': None, 'write': None, 'move': 'N', 'next_state': 'ACCEPT'}]},
            'start_state': 'q0'
        })
        self.assertEqual(tm.transition_for('q0', BLANK), TMAction(BLANK, Move.STAY, 'ACCEPT'))
        self.assertEqual(tm_to_dict(tm)['transitions']['q0'][0]['move'], 'S')

    def test_unknown_move_message(self):
        with self.assertRaises(ValueError) as context:
            tm_from_dict({
                'states': ['q0'],
                'transitions': {'q0': [{'read': 'a', 'write': 'a', 'move': 'UP', 'next_state': 'q0'}]},
                'start_state': 'q0'
            })
        self.assertIn("expected one of 'L', 'R', 'S' or 'N'", str(context.exception))


if __name__ == '__main__':
    unittest.main()
