"""Scene flow: title, tutorial, background loading and results."""

from __future__ import annotations

import threading
from typing import Callable, NamedTuple, Optional, Sequence

from railshot.gamepad import Button, GamePad

SCREEN_WIDTH = 1980.0
SCREEN_HEIGHT = 1080.0
GOAL_DISTANCE = 363.0
PROGRESS_BAR_WIDTH = 1910.0
PROGRESS_MARKER_OFFSET = 32.0
HIGH_SCORE_SLOTS = 3

_LOADING_ICON = "Data/Sprite/LoadingIcon.png"
_LOADING_ICON_SIZE = 256.0
_LOADING_SPIN_SPEED = 180.0
_TITLE_IMAGE = "Data/Sprite/game001.png"
_RESULT_IMAGE = "Data/Sprite/result.png"
_NUMBER_IMAGE = "Data/Sprite/number.png"
_TUTORIAL_PAGES = tuple(f"Data/Sprite/tutorial_{n}.png" for n in range(1, 6))
_TUTORIAL_END = len(_TUTORIAL_PAGES)


class _Draw(NamedTuple):
    """One sprite to draw: image, destination rectangle, angle and source offset."""

    image: str
    x: float
    y: float
    width: float
    height: float
    angle: float = 0.0
    source_x: float = 0.0


def score_digits(score: int) -> list[int]:
    """Digits shown for ``score``, least significant first.

    A negative score shows nothing. When the score is one less than a power
    of ten a leading zero digit is shown as well.
    """
    digits = []
    place = 1
    while place - 1 <= score:
        digits.append((score // place) % 10)
        place *= 10
    return digits


def insert_high_score(table: Sequence[int], score: int) -> list[int]:
    """Return the three-entry high-score table with ``score`` entered.

    The score takes the first slot it beats; the entries below move down
    only where they are strictly ordered.
    """
    if len(table) != HIGH_SCORE_SLOTS:
        raise ValueError(f"high-score table must have {HIGH_SCORE_SLOTS} entries")
    result = [int(value) for value in table]
    for i, value in enumerate(result):
        if value < score:
            if i < 2 and result[i] > result[i + 1]:
                if i < 1 and result[i + 1] > result[i + 2]:
                    result[i + 2] = result[i + 1]
                result[i + 1] = result[i]
            result[i] = score
            break
    return result


def progress_marker_x(position_z: float) -> float:
    """Horizontal screen position of the progress marker for a player at ``position_z``."""
    whole_z = float(int(position_z))
    return (whole_z / -GOAL_DISTANCE) * PROGRESS_BAR_WIDTH - PROGRESS_MARKER_OFFSET


def _full_screen(image: str) -> _Draw:
    return _Draw(image, 0.0, 0.0, SCREEN_WIDTH, SCREEN_HEIGHT)


def _pressed(gamepad: GamePad, button: Button) -> bool:
    return bool(gamepad.button_down & button)


class Scene:
    """A screen of the game; ``manager`` is set when the scene is scheduled."""

    def __init__(self) -> None:
        self.manager: Optional[SceneManager] = None
        self._ready = threading.Event()

    @property
    def is_ready(self) -> bool:
        """True once the scene has been initialised ahead of time."""
        return self._ready.is_set()

    def initialize(self) -> None:
        """Prepare the scene's resources."""

    def finalize(self) -> None:
        """Release the scene's resources."""

    def update(self, elapsed_time: float) -> None:
        """Advance the scene by ``elapsed_time`` seconds."""

    def render(self) -> list[_Draw]:
        """Return the sprites to draw this frame."""
        return []

    def draw_gui(self) -> list[str]:
        """Return the debug GUI lines to show; scenes show none by default."""
        return []

    def set_ready(self) -> None:
        """Mark the scene as already initialised."""
        self._ready.set()


class SceneManager:
    """Runs the current scene and switches to a scheduled one between frames."""

    def __init__(self) -> None:
        self.current_scene: Optional[Scene] = None
        self.next_scene: Optional[Scene] = None

    def update(self, elapsed_time: float) -> None:
        """Switch to a scheduled scene if any, then update the current one."""
        if self.next_scene is not None:
            self.clear()
            self.current_scene = self.next_scene
            self.next_scene = None
            if not self.current_scene.is_ready:
                self.current_scene.initialize()
        if self.current_scene is not None:
            self.current_scene.update(elapsed_time)

    def render(self) -> list[_Draw]:
        """Return the current scene's sprites."""
        if self.current_scene is None:
            return []
        return self.current_scene.render()

    def draw_gui(self) -> list[str]:
        """Return the current scene's GUI lines."""
        if self.current_scene is None:
            return []
        return self.current_scene.draw_gui()

    def clear(self) -> None:
        """Finalise and drop the current scene."""
        if self.current_scene is not None:
            self.current_scene.finalize()
            self.current_scene = None

    def change_scene(self, scene: Scene) -> None:
        """Schedule ``scene`` to become current at the next update."""
        scene.manager = self
        self.next_scene = scene


class SceneLoading(Scene):
    """Shows a spinning icon while the next scene initialises on another thread."""

    def __init__(self, next_scene: Scene) -> None:
        super().__init__()
        self.next_scene: Optional[Scene] = next_scene
        self.angle = 0.0
        self._thread: Optional[threading.Thread] = None
        self._error: Optional[BaseException] = None

    def initialize(self) -> None:
        """Start initialising the next scene in the background."""
        self._thread = threading.Thread(target=self._load, daemon=True)
        self._thread.start()

    def _load(self) -> None:
        scene = self.next_scene
        if scene is None:
            return
        try:
            scene.initialize()
        except BaseException as error:  # re-raised on the main thread
            self._error = error
            return
        scene.set_ready()

    def finalize(self) -> None:
        """Wait for the loading thread to finish."""
        if self._thread is not None:
            self._thread.join()
            self._thread = None

    def update(self, elapsed_time: float) -> None:
        """Spin the icon and switch once the next scene is ready."""
        self.angle += _LOADING_SPIN_SPEED * elapsed_time
        if self._error is not None:
            error, self._error = self._error, None
            raise error
        scene = self.next_scene
        if scene is not None and scene.is_ready and self.manager is not None:
            self.manager.change_scene(scene)
            self.next_scene = None

    def render(self) -> list[_Draw]:
        """Draw the loading icon in the bottom-right corner."""
        return [
            _Draw(
                _LOADING_ICON,
                SCREEN_WIDTH - _LOADING_ICON_SIZE,
                SCREEN_HEIGHT - _LOADING_ICON_SIZE,
                _LOADING_ICON_SIZE,
                _LOADING_ICON_SIZE,
                self.angle,
            )
        ]


class SceneTitle(Scene):
    """Title screen; pressing X moves on through a loading screen."""

    def __init__(
        self, gamepad: GamePad, next_scene: Optional[Callable[[], Scene]] = None
    ) -> None:
        super().__init__()
        self.gamepad = gamepad
        self.next_scene = next_scene or (lambda: SceneTutorial(gamepad))
        self.image = _TITLE_IMAGE

    def update(self, elapsed_time: float) -> None:
        """Move on when X is pressed."""
        if _pressed(self.gamepad, Button.X) and self.manager is not None:
            self.manager.change_scene(SceneLoading(self.next_scene()))

    def render(self) -> list[_Draw]:
        """Draw the title image over the whole screen."""
        return [_full_screen(self.image)]


class SceneTutorial(Scene):
    """Five tutorial pages; each X press turns a page, the last moves on."""

    def __init__(
        self, gamepad: GamePad, next_scene: Optional[Callable[[], Scene]] = None
    ) -> None:
        super().__init__()
        self.gamepad = gamepad
        self.next_scene = next_scene or (lambda: SceneTitle(gamepad))
        self.page = 0
        self.image = _TUTORIAL_PAGES[0]

    def update(self, elapsed_time: float) -> None:
        """Turn a page on X and move on after the last page."""
        if _pressed(self.gamepad, Button.X):
            self.page += 1
        if 1 <= self.page < _TUTORIAL_END:
            self.image = _TUTORIAL_PAGES[self.page]
        elif self.page == _TUTORIAL_END and self.manager is not None:
            self.manager.change_scene(SceneLoading(self.next_scene()))

    def render(self) -> list[_Draw]:
        """Draw the current page over the whole screen."""
        return [_full_screen(self.image)]


class SceneResult(Scene):
    """Enters the run's score into the shared high-score table and shows both."""

    def __init__(
        self,
        gamepad: GamePad,
        score: int,
        high_scores: list[int],
        next_scene: Optional[Callable[[], Scene]] = None,
    ) -> None:
        super().__init__()
        self.gamepad = gamepad
        self.score = score
        self.high_scores = high_scores
        self.next_scene = next_scene or (lambda: SceneTitle(gamepad))

    def initialize(self) -> None:
        """Enter the score into the high-score table."""
        self.high_scores[:] = insert_high_score(self.high_scores, self.score)

    def update(self, elapsed_time: float) -> None:
        """Go back to the title through a loading screen when X is pressed."""
        if _pressed(self.gamepad, Button.X) and self.manager is not None:
            self.manager.change_scene(SceneLoading(self.next_scene()))

    def render(self) -> list[_Draw]:
        """Draw the background, the high-score rows and this run's score."""
        draws = [_full_screen(_RESULT_IMAGE)]
        rows = [(170.0 + m * 160.0, value) for m, value in enumerate(self.high_scores)]
        rows.append((660.0, self.score))
        for y, value in rows:
            draws.extend(
                _Draw(_NUMBER_IMAGE, 900.0 - j * 100.0, y, 100.0, 50.0, 0.0, digit * 100.0)
                for j, digit in enumerate(score_digits(value))
            )
        return draws