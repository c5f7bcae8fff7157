from .cli import app


def main():
    app(prog_name="normcheck")


if __name__ == "__main__":
    main()
