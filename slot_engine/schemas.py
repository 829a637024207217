from marshmallow import Schema, fields, ValidationError, INCLUDE
from marshmallow.validate import OneOf, Range

# These schemas only check JSON types. Structural rules (ids present,
# paylines inside the grid, bet bounds, rtp range) belong to
# config_validator so that they are reported as named configuration rules.

PAYOUT_COUNTS = ['3', '4', '5']


def validate_amount(amount):
    """Validate a monetary amount sent by a client."""
    if amount <= 0:
        raise ValidationError('Amount must be greater than zero.')
    if amount > 2**31 - 1:
        raise ValidationError('Amount exceeds maximum allowed value.')
    return amount


# --- Slot configuration (SlotConfig JSON shape) ---
class SymbolSchema(Schema):
    class Meta:
        unknown = INCLUDE

    id = fields.Str()
    emoji = fields.Str()
    name = fields.Str()
    payout = fields.Dict(
        keys=fields.Str(validate=OneOf(PAYOUT_COUNTS)),
        values=fields.Float(validate=Range(min=0, error="Payout multipliers cannot be negative."))
    )
    isWild = fields.Bool()
    isScatter = fields.Bool()
    isJackpot = fields.Bool()


class PaylineSchema(Schema):
    id = fields.Int(strict=True)
    positions = fields.List(fields.List(fields.Raw()))


class ReelConfigSchema(Schema):
    rows = fields.Int(strict=True)
    cols = fields.Int(strict=True)
    symbolWeights = fields.Dict(keys=fields.Str(), values=fields.Float())


class FeaturesSchema(Schema):
    hasWilds = fields.Bool()
    hasScatters = fields.Bool()
    hasFreespins = fields.Bool()
    hasJackpot = fields.Bool()
    hasMultipliers = fields.Bool()


class ThemeSchema(Schema):
    backgroundColor = fields.Str()
    reelColor = fields.Str()
    buttonColor = fields.Str()


class SlotConfigSchema(Schema):
    class Meta:
        unknown = INCLUDE

    id = fields.Str()
    name = fields.Str()
    author = fields.Str(allow_none=True)
    createdAt = fields.Int(allow_none=True)
    reels = fields.Nested(ReelConfigSchema)
    symbols = fields.List(fields.Nested(SymbolSchema))
    paylines = fields.List(fields.Nested(PaylineSchema))
    betOptions = fields.List(fields.Float())
    minBet = fields.Float()
    maxBet = fields.Float()
    rtp = fields.Float()
    features = fields.Nested(FeaturesSchema)
    theme = fields.Nested(ThemeSchema, allow_none=True)


# --- Requests ---
class ValidateConfigRequestSchema(Schema):
    config = fields.Nested(SlotConfigSchema, required=True)


class SpinRequestSchema(Schema):
    config = fields.Nested(SlotConfigSchema, required=True)
    bet = fields.Float(required=True, validate=validate_amount)


# --- Spin result ---
class WinningLineSchema(Schema):
    paylineId = fields.Int()
    symbols = fields.List(fields.Str())
    winAmount = fields.Float()


class TriggeredFeaturesSchema(Schema):
    freeSpins = fields.Int()
    multiplier = fields.Int()
    jackpot = fields.Bool()


class SpinResultSchema(Schema):
    reelPositions = fields.List(fields.List(fields.Str()))
    winningLines = fields.List(fields.Nested(WinningLineSchema))
    totalWin = fields.Float()
    triggeredFeatures = fields.Nested(TriggeredFeaturesSchema)
