MIN_MATCH_COUNT = 3
MAX_PAYOUT_COUNT = 5


def find_wild_symbol_id(config):
    """Returns the id of the first symbol flagged as wild, or None."""
    for symbol in config['symbols']:
        if symbol.get('isWild'):
            return symbol['id']
    return None


def get_symbol_payout(symbol_config, count):
    """
    Retrieves the payout multiplier for a symbol and match count.

    Payout tables round-trip through JSON, so keys may be ints or strings.
    Missing or empty entries pay nothing.
    """
    if not symbol_config:
        return 0
    payout_map = symbol_config.get('payout') or {}
    multiplier = payout_map.get(count, payout_map.get(str(count)))
    if multiplier is None:
        return 0
    return multiplier


def _line_symbols(grid, positions):
    line_symbols = []
    for row, col in positions:
        if 0 <= row < len(grid) and 0 <= col < len(grid[row]) and grid[row][col]:
            line_symbols.append(grid[row][col])
    return line_symbols


def _count_left_run(line_symbols, wild_symbol_id):
    """
    Counts the left-to-right run on a payline.

    A wild in the first cell takes on the identity of the second cell.
    The run stops at the first cell that is neither the run symbol nor a wild.

    Returns:
        tuple: (resolved_symbol_id, count)
    """
    match_symbol_id = line_symbols[0]
    count = 1
    for i in range(1, len(line_symbols)):
        current = line_symbols[i]
        if i == 1 and match_symbol_id == wild_symbol_id:
            match_symbol_id = current
            count += 1
        elif current == match_symbol_id or current == wild_symbol_id:
            count += 1
        else:
            break
    return match_symbol_id, count


def calculate_winning_lines(grid, config, bet):
    """
    Evaluates every payline of the configuration against a grid.

    Paylines are independent: a cell can take part in several winning
    lines and nothing is deduplicated across paylines.

    Args:
        grid (list[list[str]]): Symbol ids by row and column.
        config (dict): A validated slot configuration.
        bet (int | float): Bet amount the payout multipliers apply to.

    Returns:
        list[dict]: Winning lines as {'paylineId', 'symbols', 'winAmount'}.
    """
    symbols_map = {s['id']: s for s in config['symbols']}
    wild_symbol_id = find_wild_symbol_id(config)
    winning_lines = []

    for payline in config['paylines']:
        line_symbols = _line_symbols(grid, payline['positions'])
        if not line_symbols:
            continue

        match_symbol_id, count = _count_left_run(line_symbols, wild_symbol_id)
        if count < MIN_MATCH_COUNT:
            continue

        multiplier = get_symbol_payout(symbols_map.get(match_symbol_id), min(count, MAX_PAYOUT_COUNT))
        win_amount = bet * multiplier
        if win_amount > 0:
            winning_lines.append({
                'paylineId': payline['id'],
                'symbols': line_symbols[:count],
                'winAmount': win_amount,
            })

    return winning_lines
