"""
This is the main file to run the game.
It imports the run function from the neon_shooter app and runs it.
"""

from neon_shooter.app import run

if __name__ == "__main__":
    run()
