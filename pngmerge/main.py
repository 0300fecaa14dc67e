"""Точка входа в приложение."""
from pngmerge.config import setup_logging


def main() -> None:
    """Настраивает логирование, создаёт и запускает главное окно приложения."""
    setup_logging()
    # UI imported lazily: services stay usable without a display
    from pngmerge.app import PngMergeApp

    app = PngMergeApp()
    app.mainloop()


if __name__ == "__main__":
    main()
