"""Game logic for a rail shooter: maths, collision, camera, characters, projectiles, enemies, player, gamepad input, WAV parsing and scene flow."""

__version__ = "0.1.0"