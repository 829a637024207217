import logging
import secrets

from slot_engine.config_validator import SlotConfigValidator
from slot_engine.utils.reel_generator import generate_reel_positions
from slot_engine.utils.payline_evaluator import calculate_winning_lines
from slot_engine.utils.feature_trigger import check_triggered_features

logger = logging.getLogger(__name__)

JACKPOT_BET_MULTIPLIER = 1000


def _apply_win_multiplier(winning_lines, raw_total_win, multiplier):
    """
    Scales every line and the total by the same multiplier so per-line
    amounts always add up to the pre-jackpot total.
    """
    for line in winning_lines:
        line['winAmount'] = line['winAmount'] * multiplier
    return raw_total_win * multiplier


def _apply_jackpot_bonus(total_win, bet):
    """The jackpot bonus is flat and only added to the total; line amounts are left as they are."""
    return total_win + bet * JACKPOT_BET_MULTIPLIER


def handle_spin(config, bet, rng=None):
    """
    Computes one fully priced spin outcome for a slot configuration.

    The configuration is validated first. A rejected configuration yields an
    explicit failure result rather than an empty spin, so callers cannot
    mistake it for a real zero-win outcome.

    Order of pricing: payline wins are summed, a triggered multiplier scales
    both the lines and the total, then a triggered jackpot adds
    bet x 1000 to the total only.

    Args:
        config (dict): Slot configuration in SlotConfig JSON shape. Never modified.
        bet (int | float): The bet amount for this spin.
        rng: Random source shared by grid generation and feature triggers.
            Inject a seeded random.Random for reproducible spins.

    Returns:
        dict: {'success': True, 'spin_result': {...}} or
              {'success': False, 'error': {'rule', 'message', 'details'}}.
    """
    error = SlotConfigValidator(config).validate()
    if error is not None:
        logger.warning("Spin rejected for slot '%s': %s - %s",
                       config.get('id') if isinstance(config, dict) else None, error.rule, error.message)
        return {'success': False, 'error': error.to_dict()}

    rng = rng or secrets.SystemRandom()

    reel_positions = generate_reel_positions(config, rng)
    winning_lines = calculate_winning_lines(reel_positions, config, bet)
    total_win = sum(line['winAmount'] for line in winning_lines)
    triggered_features = check_triggered_features(reel_positions, config, bet, rng)

    if triggered_features.get('multiplier'):
        total_win = _apply_win_multiplier(winning_lines, total_win, triggered_features['multiplier'])

    if triggered_features.get('jackpot'):
        total_win = _apply_jackpot_bonus(total_win, bet)

    logger.debug("Slot '%s' spin: bet=%s lines=%d total_win=%s features=%s",
                 config['id'], bet, len(winning_lines), total_win, triggered_features)

    return {
        'success': True,
        'spin_result': {
            'reelPositions': reel_positions,
            'winningLines': winning_lines,
            'totalWin': total_win,
            'triggeredFeatures': triggered_features,
        }
    }
