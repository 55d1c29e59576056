"Allow `python -m nextsemver`."

from .getversion import entrypoint

if __name__ == "__main__":
    entrypoint()
