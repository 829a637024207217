import logging
import secrets

logger = logging.getLogger(__name__)

MIN_SCATTERS_FOR_FREE_SPINS = 3
FREE_SPINS_PER_SCATTER = 5
JACKPOT_PAYLINE_ID = 1
JACKPOT_BASE_CHANCE = 0.001
MULTIPLIER_BASE_CHANCE = 0.05
MULTIPLIER_VALUES = (2, 3, 5)


def _features(config):
    return config.get('features') or {}


def _clamp_probability(value):
    return max(0.0, min(1.0, value))


def bet_scaled_chance(base_chance, bet, min_bet):
    """Trigger chance that grows linearly with bet / minBet, clamped to [0, 1]."""
    return _clamp_probability(base_chance * (bet / min_bet))


def _five_of_a_kind_payout(symbol):
    payout_map = symbol.get('payout') or {}
    return payout_map.get(5, payout_map.get('5')) or 0


def resolve_jackpot_symbol(config):
    """
    Returns the symbol that pays the jackpot.

    The symbol flagged isJackpot wins; otherwise the regular (non-wild,
    non-scatter) symbol with the best 5-of-a-kind payout, first declared on ties.
    """
    symbols = config['symbols']
    for symbol in symbols:
        if symbol.get('isJackpot'):
            return symbol
    candidates = [s for s in symbols if not s.get('isWild') and not s.get('isScatter')]
    if not candidates:
        return None
    return max(candidates, key=_five_of_a_kind_payout)


def count_symbol_on_grid(grid, symbol_id):
    return sum(1 for row in grid for cell in row if cell == symbol_id)


def check_free_spins(grid, config):
    """Returns the free spins awarded by scatters anywhere on the grid, or None."""
    if not _features(config).get('hasFreespins'):
        return None
    scatter_symbol = next((s for s in config['symbols'] if s.get('isScatter')), None)
    if scatter_symbol is None:
        return None

    scatter_count = count_symbol_on_grid(grid, scatter_symbol['id'])
    if scatter_count >= MIN_SCATTERS_FOR_FREE_SPINS:
        return scatter_count * FREE_SPINS_PER_SCATTER
    return None


def _jackpot_line_complete(grid, config, jackpot_symbol_id):
    jackpot_line = next((p for p in config['paylines'] if p.get('id') == JACKPOT_PAYLINE_ID), None)
    if jackpot_line is None:
        return False
    line_symbols = [grid[r][c] for r, c in jackpot_line['positions']
                    if 0 <= r < len(grid) and 0 <= c < len(grid[r]) and grid[r][c]]
    return all(s == jackpot_symbol_id for s in line_symbols)


def check_jackpot(grid, config, bet, rng):
    """
    A full jackpot line on payline 1 always triggers. Otherwise there is a
    small bet-scaled random chance, independent of the grid.
    """
    if not _features(config).get('hasJackpot'):
        return False

    jackpot_symbol = resolve_jackpot_symbol(config)
    if jackpot_symbol is not None and _jackpot_line_complete(grid, config, jackpot_symbol['id']):
        return True

    return rng.random() < bet_scaled_chance(JACKPOT_BASE_CHANCE, bet, config['minBet'])


def check_multiplier(config, bet, rng):
    """Returns a random win multiplier (2x, 3x or 5x) or None."""
    if not _features(config).get('hasMultipliers'):
        return None
    if rng.random() < bet_scaled_chance(MULTIPLIER_BASE_CHANCE, bet, config['minBet']):
        return rng.choice(MULTIPLIER_VALUES)
    return None


def check_triggered_features(grid, config, bet, rng=None):
    """
    Evaluates the non-payline features for a grid. All three checks are
    independent and may fire together.

    Args:
        grid (list[list[str]]): The drawn grid.
        config (dict): A validated slot configuration.
        bet (int | float): Bet amount, used to scale the random trigger chances.
        rng: Random source exposing random() and choice(). Defaults to
            secrets.SystemRandom().

    Returns:
        dict: Only the triggered keys among 'freeSpins', 'jackpot', 'multiplier'.
    """
    rng = rng or secrets.SystemRandom()
    features = {}

    free_spins = check_free_spins(grid, config)
    if free_spins is not None:
        features['freeSpins'] = free_spins

    if check_jackpot(grid, config, bet, rng):
        features['jackpot'] = True

    multiplier = check_multiplier(config, bet, rng)
    if multiplier is not None:
        features['multiplier'] = multiplier

    if features:
        logger.debug("Features triggered for slot '%s': %s", config.get('id'), features)
    return features
