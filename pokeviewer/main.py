import logging
import tkinter as tk
from pokeviewer.dependencies import get_poke_client, get_settings, get_sprite_client
from pokeviewer.services.background import BackgroundLoop, QueueDispatcher
from pokeviewer.services.view_state import PokemonViewModel
from pokeviewer.ui.window import PokemonWindow

logger = logging.getLogger("pokeviewer")


def configure_logging(level: str):
    logging.basicConfig(level=level, format='%(asctime)s %(levelname)s %(name)s: %(message)s')


async def _shutdown_clients(*clients):
    for client in clients:
        await client.close()


def main():
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info(f"Starting viewer for {settings.species} ({settings.base_url})")

    poke_client = get_poke_client()
    sprite_client = get_sprite_client()
    background = BackgroundLoop().start()
    dispatcher = QueueDispatcher()

    view_model = PokemonViewModel(
        poke_client=poke_client,
        sprite_client=sprite_client,
        species=settings.species,
        dispatch=dispatcher,
    )

    root = tk.Tk()
    root.geometry("420x560")
    PokemonWindow(root, view_model, dispatcher=dispatcher)

    def on_close():
        view_model.close()
        try:
            background.submit(_shutdown_clients(poke_client, sprite_client)).result(timeout=2.0)
        except Exception as e:
            logger.warning(f"Closing HTTP clients failed: {e}")
        background.stop()
        root.destroy()

    root.protocol("WM_DELETE_WINDOW", on_close)
    view_model.start(background.loop)
    root.mainloop()


if __name__ == "__main__":
    main()
