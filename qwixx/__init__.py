"""
Qwixx Rules Engine.

Scoresheets, dice combinations and the turn phase state machine for a
multiplayer Qwixx game.
"""
