# railshot

The logic of a small rail shooter. Nothing is drawn and no sound is played.
The player is carried forward along the Z axis and fires a limited supply of
shots at targets. Enemies wander, chase and shoot back. Hits are scored, and
the scores go into a three-entry high-score table. All state lives in plain
Python objects that you step one frame at a time.

The package needs nothing beyond the standard library.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

### `railshot.mathutils`

Vector and 4x4 matrix helpers. Vectors are row vectors and coordinates are left-handed.

- Vectors: `dot`, `cross`, `length`, `normalize` (the zero vector stays zero).
- Matrices: `mat_mul`, `identity`, `scaling`, `translation`,
  `rotation_roll_pitch_yaw`, `rotation_axis`, `transform_normal`.
- Camera matrices: `look_at_lh` and `perspective_fov_lh`. Both raise
  `ValueError` on degenerate input, such as an eye equal to the focus or a zero
  field of view.
- `random_range(low, high, rng=None)` draws from a `random.Random` if you give
  one, and from the module-level generator otherwise.

### `railshot.collision`

- `intersect_sphere_vs_sphere`
- `intersect_cylinder_vs_cylinder`
- `intersect_sphere_vs_cylinder`

When the shapes overlap, each function returns the position the second shape is
pushed out to. When they do not overlap, it returns `None`. Cylinders stand
upright, with their position at their base.

### `railshot.camera`

- `Camera.set_look_at` sets the view matrix and the `right`, `up` and `front`
  vectors.
- `Camera.set_perspective_fov` sets the projection matrix.
- `CameraController.update(elapsed_time, camera)` clamps the pitch to ±45°,
  wraps the yaw into ±π, and places the camera `range` units behind `target`.

### `railshot.character`

`Character` covers the following:

- horizontal friction and acceleration, with less control in the air
- turning towards a direction, and jumping
- gravity and landing at y = 0
- damage through `apply_damage`, which starts a half-second invincibility
  window

The `on_landing`, `on_damaged` and `on_dead` hooks can be overridden.

### `railshot.projectile`

- `ProjectileStraight` flies in a straight line. An optional `slowdown`
  callable reduces its speed, and an optional `recalled` callable removes it.
- `ProjectileHoming` turns towards a target point.
- `ProjectileManager` owns the projectiles. A projectile registers itself on
  creation. A destroyed projectile is dropped only at the end of the
  manager's next `update`.

All projectiles expire after their life timer runs out.

### `railshot.enemy`

- `EnemyManager` owns enemies, drops destroyed ones after each update, and
  pushes overlapping enemies apart.
- `EnemySlime` moves between the states in `SlimeState`:
  - `WANDER`: walks to random points inside its territory.
  - `IDLE`: waits three to five seconds.
  - `ATTACK`: turns towards a `player` in front of it, within `search_range`,
    and fires a `ProjectileStraight` every two seconds.

### `railshot.player`

`Player` is driven one frame at a time by a `PlayerInput`.

- Each frame it advances 0.05 units towards negative Z, or 0.03 units while
  braking. It stops at `GOAL_Z` (-363).
- Every full second of braking costs one point.
- It fires at most `max_shot_count` shots, aimed from the camera towards the
  mouse. Once they are spent, it advances 0.3 units per frame.
- A projectile that damages an enemy adds the enemy's `score`.
- Consecutive hits on `combo` enemies build a combo. From a combo of two on,
  each hit also adds 30 points.
- An optional `on_hit` callback is called for each enemy hit.

### `railshot.gamepad`

`GamePad.update(pad, keys)` reads two sources: a raw `PadState` (or `None` if no
controller is connected) and the names of held keys.

- Keys `W A S D` and the arrow keys move the left stick.
- Keys `I J K L` move the right stick.
- `Z`, `X` and `V` press `A`, `B` and `Y`.
- `RETURN` presses `Y` and `SPACE` presses `X`.

The pad fills `button`, `button_down` (pressed this frame), `button_up`
(released this frame), the stick axes with dead zones, and the triggers.
`Button` is an `IntFlag`.

### `railshot.wav`

`AudioResource.parse(data)` and `AudioResource.load(path)` read RIFF/WAVE PCM
data. They return the sample bytes and a `WaveFormat`, and store 8-bit samples
as signed values. Malformed data raises `WavError`.

### `railshot.scenes`

- `SceneManager` switches scenes between frames.
- `SceneTitle` and `SceneTutorial` (five pages) move on when X is pressed.
- `SceneLoading` initialises the next scene on a worker thread and switches to
  it when that scene is ready. An error raised while loading is raised again
  from its `update`.
- `SceneResult` enters the run's score into a shared high-score list.

`render` returns the sprites to draw as a list of records. It does not draw them.

Helpers:

- `score_digits` gives the digits shown for a score.
- `insert_high_score` enters a score into a three-entry table.
- `progress_marker_x` gives the position of the progress marker on screen.

## Example

```python
from railshot.collision import intersect_cylinder_vs_cylinder
from railshot.gamepad import Button, GamePad

pushed = intersect_cylinder_vs_cylinder((0, 0, 0), 0.5, 2.0, (0.5, 0, 0), 0.5, 2.0)
print(pushed)  # (1.0, 0.0, 0.0)

pad = GamePad()
pad.update(keys=["SPACE"])
print(bool(pad.button_down & Button.X))  # True
pad.update()
print(bool(pad.button_up & Button.X))    # True
```

## What it does not do

The package has no window, renderer, audio playback, or main loop, and it has
no command to start a game.

There is no in-game scene that places the stage and enemies and ties the player,
camera and enemies together. Putting those pieces into a running game is left
to the code that uses them.

By default the title leads to the tutorial, and the tutorial leads back to the
title. Pass `next_scene` to send play somewhere else.

High scores are kept only in the list you pass to `SceneResult`. Nothing is
saved to disk.