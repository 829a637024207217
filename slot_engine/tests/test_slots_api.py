import io
import json
import logging

import pytest

from slot_engine.app import create_app
from slot_engine.config import TestingConfig
from slot_engine.error_codes import ErrorCodes, ConfigRules
from slot_engine.utils.slot_builder import create_default_slot_config


class TestSlotsApi:

    @pytest.fixture(scope="class")
    def app(self):
        app = create_app(TestingConfig)

        @app.route('/test/unhandled_exception')
        def route_unhandled_exception():
            raise ValueError("A generic unhandled error")

        return app

    @pytest.fixture()
    def client(self, app):
        return app.test_client()

    @pytest.fixture()
    def slot_config(self):
        return create_default_slot_config()

    def test_default_config(self, client):
        response = client.get('/api/slots/default-config')
        assert response.status_code == 200
        json_data = response.get_json()
        assert json_data['status'] is True
        config = json_data['config']
        assert (config['reels']['rows'], config['reels']['cols']) == (3, 5)
        assert len(config['paylines']) == 9
        # Payout keys come back as strings once serialized
        assert config['symbols'][0]['payout'] == {'3': 5, '4': 10, '5': 25}

    def test_validate_accepts_default_config(self, client, slot_config):
        response = client.post('/api/slots/validate', json={'config': slot_config})
        assert response.status_code == 200
        json_data = response.get_json()
        assert json_data == {'status': True, 'is_valid': True}

    def test_validate_reports_rule(self, client, slot_config):
        slot_config['reels']['rows'] = 0
        response = client.post('/api/slots/validate', json={'config': slot_config})
        assert response.status_code == 200
        json_data = response.get_json()
        assert json_data['is_valid'] is False
        assert json_data['error']['rule'] == ConfigRules.INVALID_ROWS
        assert json_data['error']['message'] == 'Invalid number of rows'

    @pytest.mark.parametrize("position", [[1], [1, 0, 2], [1.5, 0]])
    def test_validate_reports_malformed_payline_position(self, client, slot_config, position):
        slot_config['paylines'][0]['positions'][0] = position
        response = client.post('/api/slots/validate', json={'config': slot_config})
        assert response.status_code == 200
        json_data = response.get_json()
        assert json_data['is_valid'] is False
        assert json_data['error']['rule'] == ConfigRules.PAYLINE_POSITION_OUT_OF_BOUNDS
        assert json_data['error']['details']['payline_id'] == 1

    def test_validate_requires_config(self, client):
        response = client.post('/api/slots/validate', json={})
        assert response.status_code == 422
        json_data = response.get_json()
        assert json_data['error_code'] == ErrorCodes.VALIDATION_ERROR
        assert 'config' in json_data['details']['errors']

    def test_spin_success(self, client, slot_config):
        response = client.post('/api/slots/spin', json={'config': slot_config, 'bet': 5})
        assert response.status_code == 200
        json_data = response.get_json()
        assert json_data['status'] is True
        spin_result = json_data['spin_result']
        symbol_ids = {s['id'] for s in slot_config['symbols']}
        assert len(spin_result['reelPositions']) == 3
        assert all(len(row) == 5 and set(row) <= symbol_ids for row in spin_result['reelPositions'])
        line_total = sum(line['winAmount'] for line in spin_result['winningLines'])
        jackpot_bonus = 5000 if spin_result['triggeredFeatures'].get('jackpot') else 0
        assert spin_result['totalWin'] == pytest.approx(line_total + jackpot_bonus)

    def test_spin_with_invalid_config(self, client, slot_config):
        slot_config['paylines'][0]['positions'][0] = [7, 0]
        response = client.post('/api/slots/spin', json={'config': slot_config, 'bet': 1})
        assert response.status_code == 422
        json_data = response.get_json()
        assert json_data['status'] is False
        assert json_data['error_code'] == ErrorCodes.SLOT_CONFIG_ERROR
        assert json_data['details']['rule'] == ConfigRules.PAYLINE_POSITION_OUT_OF_BOUNDS
        assert 'request_id' in json_data

    def test_spin_with_symbol_missing_id(self, client, slot_config):
        removed = slot_config['symbols'][0].pop('id')
        del slot_config['reels']['symbolWeights'][removed]
        response = client.post('/api/slots/spin', json={'config': slot_config, 'bet': 1})
        assert response.status_code == 422
        json_data = response.get_json()
        assert json_data['error_code'] == ErrorCodes.SLOT_CONFIG_ERROR
        assert json_data['details']['rule'] == ConfigRules.INVALID_SYMBOL

    def test_spin_with_string_weight(self, client, slot_config):
        slot_config['reels']['symbolWeights']['symbol_1'] = "10"
        response = client.post('/api/slots/spin', json={'config': slot_config, 'bet': 1})
        assert response.status_code == 422
        assert response.get_json()['details']['rule'] == ConfigRules.INVALID_SYMBOL_WEIGHT

    def test_spin_with_payline_missing_id(self, client, slot_config):
        del slot_config['paylines'][0]['id']
        response = client.post('/api/slots/spin', json={'config': slot_config, 'bet': 1})
        assert response.status_code == 422
        assert response.get_json()['details']['rule'] == ConfigRules.INVALID_PAYLINE_ID

    def test_spin_bet_outside_machine_limits(self, client, slot_config):
        response = client.post('/api/slots/spin', json={'config': slot_config, 'bet': 500})
        assert response.status_code == 422
        json_data = response.get_json()
        assert json_data['error_code'] == ErrorCodes.INVALID_BET
        assert json_data['details'] == {'bet': 500, 'minBet': 1, 'maxBet': 100}

    @pytest.mark.parametrize("bet", [0, -5, "lots"])
    def test_spin_rejects_malformed_bet(self, client, slot_config, bet):
        response = client.post('/api/slots/spin', json={'config': slot_config, 'bet': bet})
        assert response.status_code == 422
        json_data = response.get_json()
        assert json_data['error_code'] == ErrorCodes.VALIDATION_ERROR
        assert 'bet' in json_data['details']['errors']

    def test_spin_rejects_wrongly_typed_config(self, client, slot_config):
        slot_config['reels']['rows'] = "three"
        response = client.post('/api/slots/spin', json={'config': slot_config, 'bet': 1})
        assert response.status_code == 422
        assert response.get_json()['error_code'] == ErrorCodes.VALIDATION_ERROR

    def test_spin_rejects_non_json_body(self, client):
        response = client.post('/api/slots/spin', data="not json", content_type='text/plain')
        assert response.status_code == 422
        json_data = response.get_json()
        assert json_data['error_code'] == ErrorCodes.VALIDATION_ERROR
        assert json_data['status_message'] == "Invalid request format: Not valid JSON."

    def test_unknown_route(self, client):
        response = client.get('/api/slots/does-not-exist')
        assert response.status_code == 404
        json_data = response.get_json()
        assert json_data['error_code'] == ErrorCodes.NOT_FOUND
        assert json_data['details']['path'] == '/api/slots/does-not-exist'

    def test_method_not_allowed(self, client):
        response = client.get('/api/slots/spin')
        assert response.status_code == 405
        assert response.get_json()['error_code'] == ErrorCodes.METHOD_NOT_ALLOWED

    def test_unhandled_exception(self, client, caplog):
        response = client.get('/test/unhandled_exception')
        assert response.status_code == 500
        json_data = response.get_json()
        assert json_data['error_code'] == ErrorCodes.INTERNAL_SERVER_ERROR
        assert any(rec.levelname == 'CRITICAL' and json_data['request_id'] in rec.message for rec in caplog.records)

    def test_security_headers(self, client):
        response = client.get('/api/slots/default-config')
        assert response.headers['X-Content-Type-Options'] == 'nosniff'
        assert response.headers['X-Frame-Options'] == 'DENY'

    def test_app_log_records_written_once(self, app):
        assert app.logger.name == 'slot_engine.app'
        assert app.logger.handlers == []
        handler = logging.getLogger('slot_engine').handlers[0]
        stream = io.StringIO()
        previous_stream = handler.setStream(stream)
        try:
            app.logger.warning("single emission check")
            logging.getLogger('slot_engine.utils.spin_handler').warning("engine emission check")
        finally:
            handler.setStream(previous_stream)

        lines = stream.getvalue().splitlines()
        app_lines = [line for line in lines if 'single emission check' in line]
        engine_lines = [line for line in lines if 'engine emission check' in line]
        assert len(app_lines) == 1
        assert len(engine_lines) == 1
        assert json.loads(app_lines[0])['message'] == 'single emission check'
