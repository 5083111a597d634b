"""
This is the main file to run the game.
It imports the run function from the mini_invaders app and runs it.
"""

from mini_invaders.app import run

if __name__ == "__main__":
    run()
