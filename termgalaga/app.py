"""The terminal front end: menus, drawing, key handling and the main loop."""

from __future__ import annotations

import argparse
import contextlib
import os
import random
import sys
import threading
import time
from collections.abc import Callable, Iterable, Iterator
from typing import ContextManager, TextIO

from termgalaga.eventlog import EventLog
from termgalaga.game import Game
from termgalaga.score import Scoreboard
from termgalaga.terminal import RawTerminal

FRAME_DELAY = 0.045
CHAR_DELAY = 0.0015
BLINK_PERIOD = 14
BLINK_VISIBLE = 8

CLEAR = "\x1b[2J\x1b[H"
RESET = "\x1b[0m"
ESCAPE = "\x1b"
LEFT = "D"
RIGHT = "C"
FIRE = " "
QUIT = "q"

_COLOURS = {
    "^": "1;94",
    ".": "1;91",
    "!": "1;91",
    "M": "1;92",
    "T": "1;95",
    "Y": "1;96",
    "V": "1;93",
    **{char: "1;31" for char in "xX<>/\\|"},
}

MENU_ART = (
    "\x1b[0;97m ::::::::      :::     :::            :::      ::::::::      :::           ::::    ::::  ::::::::::: ::::    ::: ::::::::::: \n"
    "\x1b[0;96m:+:    :+:   :+: :+:   :+:          :+: :+:   :+:    :+:   :+: :+:         +:+:+: :+:+:+     :+:     :+:+:   :+:     :+:     \n"
    "\x1b[0;96m+:+         +:+   +:+  +:+         +:+   +:+  +:+         +:+   +:+        +:+ +:+:+ +:+     +:+     :+:+:+  +:+     +:+     \n"
    "\x1b[0;94m:#:        +#++:++#++: +#+        +#++:++#++: :#:        +#++:++#++:       +#+  +:+  +#+     +#+     +#+ +:+ +#+     +#+     \n"
    "\x1b[0;94m+#+   +#+# +#+     +#+ +#+        +#+     +#+ +#+   +#+# +#+     +#+       +#+       +#+     +#+     +#+  +#+#+#     +#+     \n"
    "\x1b[0;95m+#+    #+# #+#     #+# #+#        #+#     #+# #+#    #+# #+#     #+#       #+#       #+#     #+#     #+#   #+#+#     #+#     \n"
    "\x1b[0;95m ########  ###     ### ########## ###     ###  ########  ###     ###       ###       ### ########### ###    #### ########### \n"
)

GAME_OVER_ART = (
    "\x1b[0;97m ::::::::      :::     ::::    ::::  ::::::::::       ::::::::  :::     ::: :::::::::: :::::::::  \n"
    "\x1b[0;96m:+:    :+:   :+: :+:   +:+:+: :+:+:+ :+:             :+:    :+: :+:     :+: :+:        :+:    :+: \n"
    "\x1b[0;96m+:+         +:+   +:+  +:+ +:+:+ +:+ +:+             +:+    +:+ +:+     +:+ +:+        +:+    +:+ \n"
    "\x1b[0;94m:#:        +#++:++#++: +#+  +:+  +#+ +#++:++#        +#+    +:+ +#+     +:+ +#++:++#   +#++:++#:  \n"
    "\x1b[0;94m+#+   +#+# +#+     +#+ +#+       +#+ +#+             +#+    +#+  +#+   +#+  +#+        +#+    +#+ \n"
    "\x1b[0;95m#+#    #+# #+#     #+# #+#       #+# #+#             #+#    #+#   #+#+#+#   #+#        #+#    #+# \n"
    "\x1b[0;95m ########  ###     ### ###       ### ##########       ########      ###     ########## ###    ### \n"
)

START_PROMPT = " " * 51 + "[Press Space to start, q to quit!]\n"
AGAIN_PROMPT = " " * 32 + "[Space to play again, q to quit!]\n\n"

_STARTUP_MESSAGES = (
    "Library modules loaded successfully",
    "Galaga modules loaded successfuly",
    "Definitions successful",
    "Global variables successful",
    "Functions loaded",
)


def colorize(char: str) -> str:
    """Wrap one board character in the colour it is drawn with."""
    colour = _COLOURS.get(char)
    if colour is None:
        return char
    return f"\x1b[{colour}m{char}{RESET}"


def render_board(rows: Iterable[str], score: int) -> str:
    """The coloured field followed by the current score."""
    lines = ["".join(colorize(char) for char in row) + "\n" for row in rows]
    return "".join(lines) + f"\n\nCurrent Score: {score}\n"


def _prompt_visible(counter: int) -> bool:
    return counter % BLINK_PERIOD < BLINK_VISIBLE


def menu_frame(art: str, counter: int, prompt: str) -> str:
    """One frame of a menu screen; the prompt blinks with the counter."""
    frame = art + "\n"
    if _prompt_visible(counter):
        frame += "\n\n" + prompt
    return frame


def _game_over_frame(counter: int, best: int, current: int) -> str:
    frame = menu_frame(GAME_OVER_ART, counter, AGAIN_PROMPT)
    if not _prompt_visible(counter):
        frame += "\n\n\n\n"
    frame += " " * 44 + f"best score: {best} {RESET}   \n"
    frame += " " * 43 + f"\x1b[0;95m current score: {current} {RESET}\n"
    return frame


def clear_screen(stream: TextIO | None = None) -> None:
    """Clear the terminal and move the cursor home."""
    out = stream if stream is not None else sys.stdout
    out.write(CLEAR)
    out.flush()


def _next_counter(counter: int) -> int:
    return counter % BLINK_PERIOD + 1


def _read_keys(source: TextIO) -> Iterator[str]:
    """Yield single keys, with escape sequences joined into one key."""
    while True:
        char = source.read(1)
        if not char:
            return
        if char == ESCAPE:
            char += source.read(1) + source.read(1)
        yield char


class App:
    """Runs menus and games in a terminal, reading keys on a second thread."""

    def __init__(
        self,
        keys: TextIO | None = None,
        screen: TextIO | None = None,
        *,
        scoreboard: Scoreboard | None = None,
        log: EventLog | None = None,
        rng: random.Random | None = None,
        frame_delay: float = FRAME_DELAY,
        char_delay: float = CHAR_DELAY,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.keys = keys if keys is not None else sys.stdin
        self.screen = screen if screen is not None else sys.stdout
        self.scoreboard = scoreboard if scoreboard is not None else Scoreboard()
        self.log = log if log is not None else EventLog()
        self.game = Game(rng=rng, scoreboard=self.scoreboard, log=self.log)
        self.frame_delay = frame_delay
        self.char_delay = char_delay
        self._sleep = sleep
        self._state = threading.Lock()
        self.menu_running = False
        self.game_running = False
        self.exiting = False

    def handle_key(self, key: str) -> bool:
        """React to one key press. Returns False once the player quits."""
        with self._state:
            if self.menu_running and key == FIRE:
                self.menu_running = False
                self.game_running = True
            elif self.game_running:
                if key.startswith(ESCAPE) and len(key) == 3:
                    if key[2] == LEFT:
                        self.game.move_left()
                    elif key[2] == RIGHT:
                        self.game.move_right()
                elif key == FIRE:
                    self.game.fire()
            if key == QUIT:
                self.game_running = False
                self.menu_running = False
                self.exiting = True
                return False
        return True

    def run(self) -> int:
        """Show the menu, play games until the player quits, and clean up.

        Reaching the end of the key input counts as quitting.
        """
        self.log.create()
        for message in _STARTUP_MESSAGES:
            self.log.log(message)
        with self._raw_terminal():
            reader = threading.Thread(target=self._read_input, daemon=True)
            reader.start()
            self.log.log("Variable initialization complete")
            self._start_menu()
            self._clear()
            self.log.log("Game running")
            while self._playing():
                self._clear()
                if self.game.step():
                    with self._state:
                        self.game_running = False
                    self._game_over()
                    continue
                self._show(render_board(self.game.board(), self.scoreboard.current))
            self.log.log("End of main")
            reader.join(timeout=1.0)
            self.log.log("Threads rejoined")
            self.game.shots.clear()
            self.game.enemy_shots.clear()
        self.log.log("Cleanup complete\n\nBye bye!")
        self._clear()
        return 0

    def _raw_terminal(self) -> ContextManager[object]:
        try:
            fd = self.keys.fileno()
            is_tty = os.isatty(fd)
        except (AttributeError, OSError, ValueError):
            return contextlib.nullcontext()
        return RawTerminal(fd) if is_tty else contextlib.nullcontext()

    def _read_input(self) -> None:
        for key in _read_keys(self.keys):
            if not self.handle_key(key):
                return
        self.handle_key(QUIT)

    def _playing(self) -> bool:
        with self._state:
            return self.game_running

    def _in_menu(self) -> bool:
        with self._state:
            return self.menu_running and not self.exiting

    def _open_menu(self) -> None:
        with self._state:
            if not self.exiting:
                self.menu_running = True

    def _show(self, text: str) -> None:
        self.screen.write(text)
        self.screen.flush()

    def _clear(self) -> None:
        self._sleep(self.frame_delay)
        clear_screen(self.screen)

    def _reveal(self, art: str) -> None:
        for char in art:
            self._sleep(self.char_delay)
            self._show(char)

    def _start_menu(self) -> None:
        self._clear()
        self._reveal(MENU_ART)
        self._open_menu()
        counter = 1
        while self._in_menu():
            self._sleep(self.frame_delay)
            self._clear()
            counter = _next_counter(counter)
            self._show(menu_frame(MENU_ART, counter, START_PROMPT))

    def _game_over(self) -> None:
        self._clear()
        try:
            self.scoreboard.load_highest()
        except FileNotFoundError:
            pass
        self.scoreboard.check()
        self.scoreboard.save()
        self._reveal(GAME_OVER_ART)
        self._open_menu()
        counter = 1
        self._clear()
        while self._in_menu():
            self._sleep(self.frame_delay)
            self._clear()
            counter = _next_counter(counter)
            self._show(
                _game_over_frame(counter, self.scoreboard.highest, self.scoreboard.current)
            )
        with self._state:
            self.menu_running = False
            self.game_running = False
        self._clear()
        self.game.reset()
        with self._state:
            leaving = self.exiting
        if not leaving:
            self._start_menu()
        self._clear()


def main(argv: list[str] | None = None) -> int:
    """Start the game in the current terminal."""
    parser = argparse.ArgumentParser(
        prog="termgalaga",
        description="Shoot down the bug swarm. Arrows move, space fires, q quits.",
    )
    parser.parse_args(argv)
    return App().run()


if __name__ == "__main__":
    sys.exit(main())