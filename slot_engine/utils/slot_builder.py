# slot_engine/utils/slot_builder.py
"""
Slot configuration templates and editing helpers for authoring tools.

Every helper returns a new configuration and leaves its input untouched, so
a configuration handed to the engine is never changed behind its back.
"""

import copy
import time

MIN_PAYLINES = 1
MIN_SYMBOLS = 3

DEFAULT_SYMBOLS = [
    # id, emoji, name, payouts for 3/4/5, flag
    ('symbol_1', '🍒', 'Cherry', (5, 10, 25), None),
    ('symbol_2', '🍋', 'Lemon', (8, 15, 40), None),
    ('symbol_3', '🍊', 'Orange', (10, 20, 60), None),
    ('symbol_4', '🍇', 'Grapes', (15, 30, 80), None),
    ('symbol_5', '7️⃣', 'Seven', (20, 50, 150), None),
    ('wild', '⭐', 'Wild', (25, 75, 200), 'isWild'),
    ('scatter', '🎁', 'Scatter', (5, 10, 50), 'isScatter'),
    ('jackpot', '💰', 'Jackpot', (50, 200, 500), 'isJackpot'),
]

DEFAULT_WEIGHTS = {
    'symbol_1': 10, 'symbol_2': 8, 'symbol_3': 6, 'symbol_4': 4, 'symbol_5': 2,
    'wild': 1, 'scatter': 1, 'jackpot': 1,
}

# Rows per column for a 3x5 grid; payline 1 is the middle row.
DEFAULT_PAYLINE_ROWS = [
    [1, 1, 1, 1, 1],  # middle
    [0, 0, 0, 0, 0],  # top
    [2, 2, 2, 2, 2],  # bottom
    [0, 1, 2, 1, 0],  # V
    [2, 1, 0, 1, 2],  # inverted V
    [0, 0, 1, 2, 2],  # zigzag down
    [2, 2, 1, 0, 0],  # zigzag up
    [0, 1, 0, 1, 0],  # W
    [2, 1, 2, 1, 2],  # M
]


def create_default_slot_config(author='Anonymous'):
    """
    Builds a fresh 3x5 starter machine.

    Each call returns an independent structure; callers are free to edit it.
    """
    now_ms = int(time.time() * 1000)

    symbols = []
    for symbol_id, emoji, name, (p3, p4, p5), flag in DEFAULT_SYMBOLS:
        symbol = {'id': symbol_id, 'emoji': emoji, 'name': name, 'payout': {3: p3, 4: p4, 5: p5}}
        if flag:
            symbol[flag] = True
        symbols.append(symbol)

    paylines = [
        {'id': line_no, 'positions': [[row, col] for col, row in enumerate(rows)]}
        for line_no, rows in enumerate(DEFAULT_PAYLINE_ROWS, start=1)
    ]

    return {
        'id': f'slot_{now_ms}',
        'name': 'New Slot Machine',
        'author': author,
        'createdAt': now_ms,
        'reels': {
            'rows': 3,
            'cols': 5,
            'symbolWeights': dict(DEFAULT_WEIGHTS),
        },
        'symbols': symbols,
        'paylines': paylines,
        'betOptions': [1, 5, 10, 25, 50, 100],
        'minBet': 1,
        'maxBet': 100,
        'rtp': 0.96,
        'features': {
            'hasWilds': True,
            'hasScatters': True,
            'hasFreespins': True,
            'hasJackpot': True,
            'hasMultipliers': True,
        },
        'theme': {
            'backgroundColor': '#2c3e50',
            'reelColor': '#34495e',
            'buttonColor': '#e74c3c',
        },
    }


def renumber_paylines(paylines):
    """Reassigns payline ids 1..n in list order."""
    for line_no, payline in enumerate(paylines, start=1):
        payline['id'] = line_no
    return paylines


def remove_payline(config, index):
    """
    Returns a copy of the config without the payline at `index`, ids kept
    contiguous. The last remaining payline is never removed.
    """
    new_config = copy.deepcopy(config)
    paylines = new_config['paylines']
    if len(paylines) <= MIN_PAYLINES or not 0 <= index < len(paylines):
        return new_config
    del paylines[index]
    renumber_paylines(paylines)
    return new_config


def remove_symbol(config, index):
    """
    Returns a copy of the config without the symbol at `index` and without
    its reel weight. Machines keep at least three symbols.
    """
    new_config = copy.deepcopy(config)
    symbols = new_config['symbols']
    if len(symbols) <= MIN_SYMBOLS or not 0 <= index < len(symbols):
        return new_config
    removed = symbols.pop(index)
    new_config['reels']['symbolWeights'].pop(removed['id'], None)
    return new_config
