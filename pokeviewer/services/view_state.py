import asyncio
import concurrent.futures
import logging
from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, TypeVar, Union
from pokeviewer.clients.pokeapi_client import FetchError
from pokeviewer.models import PokemonRecord

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_SPECIES = "mewtwo"


# Tagged states shared by the record fetch and the sprite fetch
@dataclass(frozen=True)
class Idle:
    pass

@dataclass(frozen=True)
class Loading:
    pass

@dataclass(frozen=True)
class Loaded(Generic[T]):
    value: T

@dataclass(frozen=True)
class Failed:
    error: FetchError


FetchState = Union[Idle, Loading, Loaded[PokemonRecord], Failed]
ImageState = Union[Idle, Loading, Loaded[Any], Failed]

Listener = Callable[["PokemonViewModel"], None]


def _call_now(fn: Callable[[], None]) -> None:
    fn()


class PokemonViewModel:
    """
    Holds the observable state of the viewer: the record fetch, the sprite
    fetch keyed by URL, and an unrelated click counter.

    All state writes go through ``dispatch`` so a GUI can marshal them onto
    its own thread. Listeners are called after every write.
    """

    def __init__(
        self,
        poke_client,
        sprite_client,
        species: str = DEFAULT_SPECIES,
        dispatch: Optional[Callable[[Callable[[], None]], None]] = None,
    ):
        self._poke_client = poke_client
        self._sprite_client = sprite_client
        self._dispatch = dispatch or _call_now
        self._listeners: list[Listener] = []
        self._task: Optional[concurrent.futures.Future] = None
        # Worker-side key for the last requested sprite; the public sprite_url follows it on the UI thread
        self._requested_sprite_url: Optional[str] = None

        self.species = species
        self.fetch_state: FetchState = Idle()
        self.image_state: ImageState = Idle()
        self.sprite_url: Optional[str] = None
        self.click_count = 0

    # --- Observation ---

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self):
        for listener in list(self._listeners):
            listener(self)

    @property
    def is_loading(self) -> bool:
        return isinstance(self.fetch_state, Loading)

    @property
    def record(self) -> Optional[PokemonRecord]:
        if isinstance(self.fetch_state, Loaded):
            return self.fetch_state.value
        return None

    @property
    def error(self) -> Optional[FetchError]:
        if isinstance(self.fetch_state, Failed):
            return self.fetch_state.error
        return None

    # --- Transitions ---

    def _set_fetch_state(self, state: FetchState):
        def apply():
            logger.debug(f"Fetch state for {self.species}: {type(self.fetch_state).__name__} -> {type(state).__name__}")
            self.fetch_state = state
            self._notify()

        self._dispatch(apply)

    def _set_image_state(self, url: str, state: ImageState):
        def apply():
            # A newer sprite URL owns the image state; drop stale results
            if url != self._requested_sprite_url:
                return
            logger.debug(f"Image state for {url}: {type(state).__name__}")
            self.sprite_url = url
            self.image_state = state
            self._notify()

        self._dispatch(apply)

    def increment(self) -> int:
        """Counts one user click. Never touches the fetch or image state."""
        self.click_count += 1
        self._notify()
        return self.click_count

    async def load(self):
        """Runs Idle -> Loading -> Loaded | Failed for the configured species."""
        self._set_fetch_state(Loading())

        try:
            record = await self._poke_client.fetch(self.species)
        except FetchError as e:
            logger.warning(f"Loading {self.species} failed: {e.detail}")
            self._set_fetch_state(Failed(e))
            return

        self._set_fetch_state(Loaded(record))

        if record.sprite_url is not None:
            await self.load_sprite(record.sprite_url)

    async def load_sprite(self, url: str):
        """Loads the sprite sub-state. A URL that was already requested is not fetched again."""
        if url == self._requested_sprite_url:
            return
        self._requested_sprite_url = url
        self._set_image_state(url, Loading())

        try:
            image = await self._sprite_client.fetch_image(url)
        except FetchError as e:
            logger.warning(f"Loading sprite {url} failed: {e.detail}")
            self._set_image_state(url, Failed(e))
            return

        self._set_image_state(url, Loaded(image))

    # --- Lifecycle ---

    def start(self, loop: asyncio.AbstractEventLoop):
        """Schedules the one startup fetch on ``loop`` (which may run on another thread)."""
        if self._task is not None:
            return self._task
        self._task = asyncio.run_coroutine_threadsafe(self.load(), loop)
        return self._task

    def close(self):
        """Cancels the startup fetch if it is still in flight."""
        if self._task is not None and not self._task.done():
            logger.info(f"Cancelling in-flight load of {self.species}")
            self._task.cancel()
        self._listeners.clear()
