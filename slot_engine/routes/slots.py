from flask import Blueprint, request, jsonify, current_app, g

from slot_engine.schemas import ValidateConfigRequestSchema, SpinRequestSchema, SpinResultSchema
from slot_engine.config_validator import validate_slot_config
from slot_engine.utils.spin_handler import handle_spin
from slot_engine.utils.slot_builder import create_default_slot_config
from slot_engine.exceptions import ValidationException, SlotConfigurationException
from slot_engine.error_codes import ErrorCodes

slots_bp = Blueprint('slots', __name__, url_prefix='/api/slots')


def _get_json_body():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationException("Invalid request format: Not valid JSON.")
    return data


@slots_bp.route('/default-config', methods=['GET'])
def get_default_config():
    """Fresh starter configuration for the authoring UI."""
    return jsonify({'status': True, 'config': create_default_slot_config()}), 200


@slots_bp.route('/validate', methods=['POST'])
def validate_config():
    data = _get_json_body()
    # Marshmallow errors are handled by the global handler
    ValidateConfigRequestSchema().load(data)

    result = validate_slot_config(data['config'])
    response = {'status': True, 'is_valid': result['is_valid']}
    if not result['is_valid']:
        response['error'] = result['error']
    return jsonify(response), 200


@slots_bp.route('/spin', methods=['POST'])
def spin():
    data = _get_json_body()
    loaded = SpinRequestSchema().load(data)

    config = data['config']
    bet = loaded['bet']

    if bet > current_app.config.get('MAX_REQUEST_BET', 2**31 - 1):
        raise ValidationException("Bet amount exceeds maximum allowed value.", error_code=ErrorCodes.INVALID_BET)

    validation = validate_slot_config(config)
    if not validation['is_valid']:
        raise SlotConfigurationException(validation['error']['message'], details=validation['error'])

    if not config['minBet'] <= bet <= config['maxBet']:
        raise ValidationException(
            f"Bet amount must be between {config['minBet']} and {config['maxBet']}.",
            details={'bet': bet, 'minBet': config['minBet'], 'maxBet': config['maxBet']},
            error_code=ErrorCodes.INVALID_BET
        )

    outcome = handle_spin(config, bet)
    if not outcome['success']:
        raise SlotConfigurationException(outcome['error']['message'], details=outcome['error'])

    spin_result = outcome['spin_result']
    current_app.logger.info(
        f"Request ID: {g.get('request_id', 'N/A')} - Spin on slot '{config['id']}': "
        f"bet={bet} total_win={spin_result['totalWin']} features={spin_result['triggeredFeatures']}"
    )
    return jsonify({'status': True, 'spin_result': SpinResultSchema().dump(spin_result)}), 200
