import bisect
import logging
import math
import secrets

logger = logging.getLogger(__name__)

JACKPOT_COLUMN_DECAY = 0.2
JACKPOT_MIN_WEIGHT_FACTOR = 0.1
WILD_MIDDLE_REEL_BOOST = 1.5
SCATTER_WEIGHT_FACTOR = 0.8


def adjust_weight_for_column(symbol_config, base_weight, column, columns):
    """
    Applies the per-column class adjustment to a symbol's base weight.

    Jackpot symbols get rarer on later columns (never below 10% of base),
    wilds are boosted on the middle column and scatters are damped
    everywhere. The first matching flag wins, in that order.
    """
    if symbol_config is None:
        return base_weight
    if symbol_config.get('isJackpot'):
        return base_weight * max(JACKPOT_MIN_WEIGHT_FACTOR, 1 - column * JACKPOT_COLUMN_DECAY)
    if symbol_config.get('isWild'):
        return base_weight * (WILD_MIDDLE_REEL_BOOST if column == columns // 2 else 1)
    if symbol_config.get('isScatter'):
        return base_weight * SCATTER_WEIGHT_FACTOR
    return base_weight


def _column_weight_table(config, column):
    """
    Builds (symbol_ids, cumulative_weights) for one column.

    Adjusted weights are floored to integers; symbols whose weight floors
    to zero (or below) are left out of the table.
    """
    reels = config['reels']
    symbols_map = {s['id']: s for s in config['symbols']}
    symbol_ids = []
    cumulative = []
    running_total = 0
    for symbol_id, base_weight in (reels.get('symbolWeights') or {}).items():
        adjusted = adjust_weight_for_column(symbols_map.get(symbol_id), base_weight, column, reels['cols'])
        weight = max(0, math.floor(adjusted))
        if weight == 0:
            continue
        running_total += weight
        symbol_ids.append(symbol_id)
        cumulative.append(running_total)
    return symbol_ids, cumulative


def _draw_symbol(symbol_ids, cumulative, fallback_ids, rng):
    if not cumulative:
        # Empty pool: every adjusted weight floored to zero.
        return rng.choice(fallback_ids)
    point = rng.randrange(cumulative[-1])
    return symbol_ids[bisect.bisect_right(cumulative, point)]


def generate_reel_positions(config, rng=None):
    """
    Draws one symbol id for every cell of the grid.

    Each (row, col) cell gets its own independent weighted draw using the
    column-adjusted weights. When a column has no positive integer weight
    left the draw falls back to a uniform pick over every configured symbol.

    Args:
        config (dict): A validated slot configuration. It is not modified.
        rng: Random source exposing randrange() and choice(). Defaults to
            secrets.SystemRandom().

    Returns:
        list[list[str]]: rows x cols grid of symbol ids.
    """
    rng = rng or secrets.SystemRandom()
    rows = config['reels']['rows']
    columns = config['reels']['cols']
    fallback_ids = [s['id'] for s in config['symbols']]

    tables = [_column_weight_table(config, c_idx) for c_idx in range(columns)]
    for c_idx, (symbol_ids, _) in enumerate(tables):
        if not symbol_ids:
            logger.warning(
                "No positive weights for column %s of slot '%s'; using uniform draw over %d symbols",
                c_idx, config.get('id'), len(fallback_ids)
            )

    grid = []
    for _ in range(rows):
        row = []
        for c_idx in range(columns):
            symbol_ids, cumulative = tables[c_idx]
            row.append(_draw_symbol(symbol_ids, cumulative, fallback_ids, rng))
        grid.append(row)
    return grid
