from django.http import JsonResponse, StreamingHttpResponse
from django.views.decorators.http import require_POST
from django.views.decorators.csrf import csrf_exempt
import json
import logging

from .automaton_model import Verdict, decode_symbol, encode_symbol, tm_from_dict, tm_to_dict
from .conf import default_max_steps, max_steps_limit
from .dfa_properties import validate_dfa_structure, is_empty_language
from .dfa_transformations import dfa_to_tm
from .tm_simulation import simulate_tm, simulate_tm_generator

logger = logging.getLogger(__name__)


def _dfa_from_json(dfa):
    """
    JSON object keys are always strings, so transition keys such as "0" are
    matched back to the declared states (e.g. 0) by their string form.
    """
    if not isinstance(dfa, dict) or not isinstance(dfa.get('transitions'), dict):
        return dfa
    if not isinstance(dfa.get('states'), list):
        return dfa

    transitions = dict(dfa['transitions'])
    for state in dfa['states']:
        if isinstance(state, (list, dict)) or state in transitions:
            continue
        if str(state) in transitions:
            transitions[state] = transitions.pop(str(state))

    return {**dfa, 'transitions': transitions}


def _input_from_json(value):
    if isinstance(value, list):
        return [decode_symbol(symbol) for symbol in value]
    return value


def _max_steps_from_json(data):
    max_steps = data.get('max_steps', default_max_steps())
    if isinstance(max_steps, bool) or not isinstance(max_steps, int) or max_steps < 0:
        raise ValueError('max_steps must be a non-negative integer')
    if max_steps > max_steps_limit():
        raise ValueError(f'max_steps must not exceed {max_steps_limit()}')
    return max_steps


def _machine_from_request(data):
    """
    Returns the TM to simulate: compiled from 'dfa' when one is given,
    otherwise built from a hand-authored 'tm'.
    """
    if data.get('dfa'):
        dfa = _dfa_from_json(data['dfa'])
        validation = validate_dfa_structure(dfa)
        if not validation['valid']:
            raise ValueError(validation['error'])
        return dfa_to_tm(dfa)

    if data.get('tm'):
        return tm_from_dict(data['tm'])

    raise ValueError('Missing DFA or TM definition')


def _result_to_json(result):
    return {
        'verdict': result['verdict'].value,
        'accepted': result['verdict'] == Verdict.ACCEPT,
        'step_count': result['step_count'],
        'final_tape': [encode_symbol(symbol) for symbol in result['final_tape']],
        'trace': result['trace'],
        'reason': result['reason']
    }


@csrf_exempt
@require_POST
def validate_dfa_view(request):
    """
    Django view to check whether a DFA is well formed.

    Expects a POST request with a JSON body containing:
    - dfa: The DFA definition

    Returns a JSON response with 'valid' and, when invalid, 'error'.
    """
    try:
        data = json.loads(request.body)
        dfa = data.get('dfa')

        if not dfa:
            return JsonResponse({'error': 'Missing DFA definition'}, status=400)

        return JsonResponse(validate_dfa_structure(_dfa_from_json(dfa)))

    except ValueError as e:
        return JsonResponse({'error': str(e)}, status=400)
    except Exception as e:
        logger.exception('DFA validation failed')
        return JsonResponse({'error': f'Server error: {str(e)}'}, status=500)


@csrf_exempt
@require_POST
def check_empty(request):
    """
    Django view to decide whether a DFA accepts no string at all.
    """
    try:
        data = json.loads(request.body)
        dfa = data.get('dfa')

        if not dfa:
            return JsonResponse({'error': 'Missing DFA definition'}, status=400)

        dfa = _dfa_from_json(dfa)
        validation = validate_dfa_structure(dfa)
        if not validation['valid']:
            return JsonResponse({'error': validation['error']}, status=400)

        return JsonResponse({'empty': is_empty_language(dfa)})

    except ValueError as e:
        return JsonResponse({'error': str(e)}, status=400)
    except Exception as e:
        logger.exception('Emptiness check failed')
        return JsonResponse({'error': f'Server error: {str(e)}'}, status=500)


@csrf_exempt
@require_POST
def convert_dfa_to_tm(request):
    """
    Django view to compile a DFA into an equivalent Turing machine.

    Expects a POST request with a JSON body containing:
    - dfa: The DFA definition

    Returns a JSON response with the TM (blank cells written as null)
    and a few statistics about it.
    """
    try:
        data = json.loads(request.body)
        dfa = data.get('dfa')

        if not dfa:
            return JsonResponse({'error': 'Missing DFA definition'}, status=400)

        dfa = _dfa_from_json(dfa)
        validation = validate_dfa_structure(dfa)
        if not validation['valid']:
            return JsonResponse({'error': validation['error']}, status=400)

        tm = dfa_to_tm(dfa)

        return JsonResponse({
            'tm': tm_to_dict(tm),
            'stats': {
                'states_count': len(tm.states),
                'tape_alphabet_size': len(tm.tape_alphabet),
                'transitions_count': len(tm.transitions)
            }
        })

    except ValueError as e:
        return JsonResponse({'error': str(e)}, status=400)
    except Exception as e:
        logger.exception('DFA to TM conversion failed')
        return JsonResponse({'error': f'Server error: {str(e)}'}, status=500)


@csrf_exempt
@require_POST
def simulate_tm_view(request):
    """
    Django view to run a Turing machine on an input.

    Expects a POST request with a JSON body containing:
    - dfa: A DFA to compile and run, or
    - tm: A hand-authored TM in the layout returned by the dfa-to-tm endpoint
    - input: The input, a string or a list of symbols (defaults to '')
    - max_steps: Optional step bound

    Returns a JSON response with the verdict, step count, final tape and trace.
    """
    try:
        data = json.loads(request.body)
        tm = _machine_from_request(data)
        max_steps = _max_steps_from_json(data)
        input_symbols = _input_from_json(data.get('input', ''))

        result = simulate_tm(tm, input_symbols, max_steps)
        return JsonResponse(_result_to_json(result))

    except (ValueError, TypeError) as e:
        return JsonResponse({'error': str(e)}, status=400)
    except Exception as e:
        logger.exception('TM simulation failed')
        return JsonResponse({'error': f'Server error: {str(e)}'}, status=500)


@csrf_exempt
@require_POST
def simulate_tm_stream(request):
    """
    Django view to stream a Turing machine run step by step.
    Returns configurations as they are reached using Server-Sent Events format.
    """
    try:
        data = json.loads(request.body)
        tm = _machine_from_request(data)
        max_steps = _max_steps_from_json(data)
        input_symbols = _input_from_json(data.get('input', ''))

        events = simulate_tm_generator(tm, input_symbols, max_steps)

    except (ValueError, TypeError) as e:
        message = str(e)

        def error_generator():
            yield f"data: {json.dumps({'error': message})}\n\n"

        return StreamingHttpResponse(
            error_generator(),
            content_type='text/event-stream',
            status=400
        )

    def result_generator():
        """Generator to stream TM configurations as Server-Sent Events"""
        try:
            for event in events:
                if event['type'] == 'halt':
                    event = {
                        **event,
                        'verdict': event['verdict'].value,
                        'final_tape': [encode_symbol(symbol) for symbol in event['final_tape']]
                    }
                yield f"data: {json.dumps(event)}\n\n"

            # Send end-of-stream marker
            yield f"data: {json.dumps({'type': 'end'})}\n\n"

        except Exception as e:
            logger.exception('Streaming TM simulation failed')
            yield f"data: {json.dumps({'type': 'error', 'message': str(e)})}\n\n"

    response = StreamingHttpResponse(result_generator(), content_type='text/event-stream')
    response['Cache-Control'] = 'no-cache'
    response['X-Accel-Buffering'] = 'no'  # Disable nginx buffering

    return response
