# termgalaga

A small Galaga-style arcade shooter that you play in a terminal.

Bugs fly in along curved paths from either side of the field, settle into a
formation, and after a while dive down towards your ship. Shoot them before
they reach you, and dodge the shots they fire back.

## Installing

```
pip install .
```

The game needs a POSIX terminal that understands ANSI colour codes. When
standard input is a terminal, it is switched to unbuffered input with echo
turned off for as long as the game runs, and put back afterwards.

## Playing

```
termgalaga
```

The command takes no options other than `--help`.

Controls:

- **Space**: start the game from the menu, or fire while playing
- **Left / Right arrow**: move the ship
- **q**: quit at any time

Each bug you hit is worth 10 points. The game ends when a bug or a bug's shot
reaches your ship. The game-over screen then shows the best score so far and
the score of the game just played. Press Space to go back to the start menu
and play again, or q to quit. Reaching the end of the key input also quits.

## Files it writes

The game writes two files in the current directory:

- `highscore.txt`: the best score so far, read and updated after each game
- `log.txt`: emptied at start-up, then a timestamped entry for each step of
  start-up and shut-down and for every bug shot down

## Using it as a library

The game logic does not depend on the terminal.

- `termgalaga.game.Game` holds the whole state of a game. Call `step()` once
  per frame; it returns `True` when the ship was hit. `move_left()`,
  `move_right()` and `fire()` are the player's actions, `board()` returns the
  13 rows of the 50-column playing field as strings, and `reset()` starts a
  fresh game. A `random.Random` can be passed in for repeatable games.
- `termgalaga.app.render_board(rows, score)` turns those rows into coloured
  text followed by the score line.
- `termgalaga.score.Scoreboard` tracks the current and best score and reads
  and writes the score file.
- `termgalaga.eventlog.EventLog` writes the timestamped log; its placeholder
  expansion is available on its own as `termgalaga.eventlog.format_message`.
- `termgalaga.bugs.Swarm`, `termgalaga.bullets.PlayerShots` and
  `termgalaga.bullets.EnemyShots` move the bugs and shots.
- `termgalaga.terminal.RawTerminal` is the context manager that switches a
  terminal to unbuffered key input.

## Running the tests

```
pip install ".[test]"
pytest
```