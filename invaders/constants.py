from __future__ import annotations

# ==============================================================================
# Glyphs
# ==============================================================================

# Two 3-character animation frames per formation row, selected by frame offset 0 or 3.
FORMATION_GLYPHS = ("<o>>o<", "}O{-O-", "[T]]+[", "(+)-x-")
FORMATION_GLYPH_WIDTH = 3
FRAME_OFFSETS = (0, 3)
EXPLODING_GLYPH = "x"

# Indexed by remaining strength (0..MaxStrength).
SHIELD_GLYPHS = " -=#"

PLAYER_GLYPH = "<I>"
PLAYER_HIT_GLYPH = "X"

# Render cells a player projectile flies through without scoring.
IGNORABLE_GLYPHS = " *#=-"

BLANK = " "

# ==============================================================================
# Formation Layout
# ==============================================================================

# Horizontal distance between the left edges of adjacent formation columns.
COL_SPACING = 6

# Screen rows between adjacent formation rows.
ROW_SPACING = 2

# ==============================================================================
# Firing & Scoring
# ==============================================================================

# Per-frame fire probability for a live cell aligned with the player's column.
FIRE_PROB_ALIGNED = 0.20

# Per-frame fire probability otherwise.
FIRE_PROB_RANDOM = 0.02

SCORE_PER_HIT = 100

# ==============================================================================
# Status & Banners
# ==============================================================================

STATUS_COL = 2
STATUS_ROW = 0
STATUS_FORMAT = "Score: {score:6d}   Lives: {lives:2d}   FPS: {fps:.1f}"

GAME_OVER_TEXT = "GAME OVER! Press Spacebar to restart."
# Banner starts this many columns left of the screen centre.
GAME_OVER_CENTER_OFFSET = 20

PAUSED_TEXT = "PAUSED"
