"""Entry point for running as a module."""
from dotenv_launch.app import run

if __name__ == "__main__":
    run()
