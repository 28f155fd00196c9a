from .cli import main_module


if __name__ == "__main__":
    raise SystemExit(main_module())
