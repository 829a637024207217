"""
Structural validation of slot machine configurations.

A configuration must pass these checks before the engine will draw a grid
from it. Validation never raises: the first rule that fails is reported as a
ConfigurationError value so the caller can fix the configuration and retry.
"""

import math
from numbers import Real
from typing import Any, Dict, List, Optional

from slot_engine.error_codes import ConfigRules


class ConfigurationError:
    """A named structural-rule violation found in a slot configuration."""

    def __init__(self, rule: str, message: str, details: Optional[dict] = None):
        self.rule = rule
        self.message = message
        self.details = details if details is not None else {}

    def to_dict(self) -> Dict[str, Any]:
        return {'rule': self.rule, 'message': self.message, 'details': dict(self.details)}

    def __eq__(self, other):
        if not isinstance(other, ConfigurationError):
            return NotImplemented
        return (self.rule, self.message, self.details) == (other.rule, other.message, other.details)

    def __repr__(self):
        return f"<ConfigurationError {self.rule}: {self.message}>"


def _is_number(value) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def _is_finite_number(value) -> bool:
    return _is_number(value) and math.isfinite(value)


def _is_positive_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 1


class SlotConfigValidator:
    """Checks the structural invariants of a single slot configuration."""

    def __init__(self, config: Any):
        """
        Args:
            config: The slot configuration mapping (SlotConfig JSON shape).
                It is only read, never modified.
        """
        self.config = config if isinstance(config, dict) else None
        self._raw = config

    # Sections are read with defaults so that a missing section trips the
    # matching rule instead of raising.
    @property
    def _reels(self) -> dict:
        reels = self.config.get('reels')
        return reels if isinstance(reels, dict) else {}

    @property
    def _symbols(self) -> List[dict]:
        symbols = self.config.get('symbols')
        return symbols if isinstance(symbols, list) else []

    @property
    def _paylines(self) -> List[dict]:
        paylines = self.config.get('paylines')
        return paylines if isinstance(paylines, list) else []

    def check_structure(self) -> Optional[ConfigurationError]:
        if self.config is None:
            return ConfigurationError(
                ConfigRules.MALFORMED_CONFIG,
                'Slot configuration must be an object',
                {'received_type': type(self._raw).__name__}
            )
        features = self.config.get('features')
        if features is not None and not isinstance(features, dict):
            return ConfigurationError(
                ConfigRules.MALFORMED_CONFIG,
                'Slot features must be an object',
                {'received_type': type(features).__name__}
            )
        return None

    def check_identity(self) -> Optional[ConfigurationError]:
        if not self.config.get('id'):
            return ConfigurationError(ConfigRules.MISSING_ID, 'Missing slot machine ID')
        if not self.config.get('name'):
            return ConfigurationError(ConfigRules.MISSING_NAME, 'Missing slot machine name')
        return None

    def check_grid(self) -> Optional[ConfigurationError]:
        rows = self._reels.get('rows')
        if not _is_positive_int(rows):
            return ConfigurationError(ConfigRules.INVALID_ROWS, 'Invalid number of rows', {'rows': rows})
        cols = self._reels.get('cols')
        if not _is_positive_int(cols):
            return ConfigurationError(ConfigRules.INVALID_COLUMNS, 'Invalid number of columns', {'cols': cols})
        return None

    def check_symbols(self) -> Optional[ConfigurationError]:
        if not self._symbols:
            return ConfigurationError(ConfigRules.NO_SYMBOLS, 'No symbols defined')

        for index, symbol in enumerate(self._symbols):
            error = self._check_symbol_entry(index, symbol)
            if error is not None:
                return error

        symbol_ids = {s['id'] for s in self._symbols}
        weights = self._reels.get('symbolWeights')
        if not isinstance(weights, dict):
            weights = {}
        for symbol_id, weight in weights.items():
            if symbol_id not in symbol_ids:
                return ConfigurationError(
                    ConfigRules.UNKNOWN_WEIGHT_SYMBOL,
                    f'Symbol weight defined for non-existent symbol: {symbol_id}',
                    {'symbol_id': symbol_id}
                )
            if not _is_finite_number(weight) or weight < 0:
                return ConfigurationError(
                    ConfigRules.INVALID_SYMBOL_WEIGHT,
                    f'Invalid weight for symbol: {symbol_id}',
                    {'symbol_id': symbol_id, 'weight': weight}
                )
        return None

    @staticmethod
    def _check_symbol_entry(index, symbol) -> Optional[ConfigurationError]:
        # The engine indexes symbols by id and multiplies bets by payouts.
        if not isinstance(symbol, dict) or not isinstance(symbol.get('id'), str) or not symbol['id']:
            return ConfigurationError(
                ConfigRules.INVALID_SYMBOL, f'Symbol {index} has no valid ID', {'index': index}
            )
        payout = symbol.get('payout')
        if payout is None:
            return None
        if not isinstance(payout, dict) or not all(_is_finite_number(v) for v in payout.values()):
            return ConfigurationError(
                ConfigRules.INVALID_SYMBOL,
                f'Symbol {symbol["id"]} has an invalid payout table',
                {'index': index, 'symbol_id': symbol['id']}
            )
        return None

    def check_paylines(self) -> Optional[ConfigurationError]:
        if not self._paylines:
            return ConfigurationError(ConfigRules.NO_PAYLINES, 'No paylines defined')

        rows = self._reels['rows']
        cols = self._reels['cols']
        for index, payline in enumerate(self._paylines):
            payline_id = payline.get('id') if isinstance(payline, dict) else None
            if not isinstance(payline_id, int) or isinstance(payline_id, bool):
                return ConfigurationError(
                    ConfigRules.INVALID_PAYLINE_ID, f'Payline {index} has no valid ID', {'index': index}
                )
            positions = payline.get('positions')
            if not isinstance(positions, list) or len(positions) != cols:
                return ConfigurationError(
                    ConfigRules.PAYLINE_LENGTH_MISMATCH,
                    f'Payline {payline_id} has incorrect number of positions',
                    {'payline_id': payline_id, 'expected': cols,
                     'actual': len(positions) if isinstance(positions, list) else None}
                )

            for position in positions:
                in_bounds = (
                    isinstance(position, (list, tuple)) and len(position) == 2
                    and all(isinstance(v, int) and not isinstance(v, bool) for v in position)
                    and 0 <= position[0] < rows and 0 <= position[1] < cols
                )
                if not in_bounds:
                    return ConfigurationError(
                        ConfigRules.PAYLINE_POSITION_OUT_OF_BOUNDS,
                        f'Payline {payline_id} has invalid position: {position}',
                        {'payline_id': payline_id, 'position': position}
                    )
        return None

    def check_bets(self) -> Optional[ConfigurationError]:
        bet_options = self.config.get('betOptions')
        if not isinstance(bet_options, list) or not bet_options:
            return ConfigurationError(ConfigRules.NO_BET_OPTIONS, 'No bet options defined')

        min_bet = self.config.get('minBet')
        if not _is_number(min_bet) or min_bet <= 0:
            return ConfigurationError(
                ConfigRules.INVALID_MIN_BET, 'Minimum bet must be greater than 0', {'minBet': min_bet}
            )
        max_bet = self.config.get('maxBet')
        if not _is_number(max_bet) or max_bet < min_bet:
            return ConfigurationError(
                ConfigRules.INVALID_MAX_BET,
                'Maximum bet must be greater than or equal to minimum bet',
                {'minBet': min_bet, 'maxBet': max_bet}
            )
        return None

    def check_rtp(self) -> Optional[ConfigurationError]:
        rtp = self.config.get('rtp')
        if not _is_number(rtp) or rtp <= 0 or rtp > 1:
            return ConfigurationError(ConfigRules.INVALID_RTP, 'RTP must be between 0 and 1', {'rtp': rtp})
        return None

    def validate(self) -> Optional[ConfigurationError]:
        """
        Run every check in order and stop at the first failure.

        Returns:
            The ConfigurationError for the first rule that fired, or None if
            the configuration is usable.
        """
        checks = (
            self.check_structure,
            self.check_identity,
            self.check_grid,
            self.check_symbols,
            self.check_paylines,
            self.check_bets,
            self.check_rtp,
        )
        for check in checks:
            error = check()
            if error is not None:
                return error
        return None


def validate_slot_config(config: Any) -> Dict[str, Any]:
    """
    Validate a slot configuration.

    Returns:
        {'is_valid': True} or {'is_valid': False, 'error': {...}} where the
        error carries the rule name, a human readable message and details.
    """
    error = SlotConfigValidator(config).validate()
    if error is not None:
        return {'is_valid': False, 'error': error.to_dict()}
    return {'is_valid': True}
