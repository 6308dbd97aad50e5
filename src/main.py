"""CLI entry point for Music Remote."""

import asyncio
from pathlib import Path
from typing import Annotated, Any, Awaitable, Callable, Optional

import typer
from rich import print as rprint
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from src.applescript import MusicApp, PlayerError, SongSelector
from src.utils.config import load_config
from src.utils.logging import setup_logging_from_config

app = typer.Typer(
    name="music-remote",
    help="Music Remote - Control the macOS Music app from the command line",
    no_args_is_help=True,
)
console = Console()

ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Path to configuration file"),
]


def get_config_path(config: Optional[Path]) -> Path:
    """Get the configuration file path."""
    return config or Path("config.yaml")


def run_command(
    config: Optional[Path],
    action: Callable[[MusicApp], Awaitable[Any]],
    verbose: bool = False,
) -> Any:
    """Build a MusicApp from the config and run one action against it."""
    settings = load_config(get_config_path(config))
    setup_logging_from_config(settings.logging, verbose=verbose)
    music = MusicApp.from_settings(settings)

    try:
        return asyncio.run(action(music))
    except PlayerError as e:
        rprint(f"[red]Error ({e.kind}):[/red] {escape(e.message)}")
        raise typer.Exit(1)


@app.command("play-pause")
def play_pause(config: ConfigOption = None) -> None:
    """Play if paused, pause if playing."""
    run_command(config, lambda music: music.toggle_play_pause())


@app.command()
def previous(config: ConfigOption = None) -> None:
    """Go to the previous track."""
    run_command(config, lambda music: music.previous())


@app.command("next")
def next_track(config: ConfigOption = None) -> None:
    """Skip to the next track."""
    run_command(config, lambda music: music.next())


@app.command()
def get(
    field: Annotated[str, typer.Argument(help="One of: name, artist, album")],
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose output"),
    ] = False,
    config: ConfigOption = None,
) -> None:
    """Print one field of the current track."""
    value = run_command(config, lambda music: music.get(field, verbose), verbose=verbose)
    console.print("" if value is None else str(value), markup=False, highlight=False)


@app.command()
def metadata(config: ConfigOption = None) -> None:
    """Show all metadata of the current track."""
    track = run_command(config, lambda music: music.get_metadata())

    table = Table(title="Now Playing")
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    for key, value in track.to_dict().items():
        table.add_row(key, "" if value is None else str(value))
    console.print(table)


@app.command("playlist-metadata")
def playlist_metadata(
    name: Annotated[str, typer.Argument(help="Playlist name")],
    config: ConfigOption = None,
) -> None:
    """Show metadata of every track in a playlist."""
    tracks = run_command(config, lambda music: music.get_playlist_metadata(name))

    if not isinstance(tracks, list):
        rprint(tracks if tracks is not None else "[yellow]Playlist is empty[/yellow]")
        return

    table = Table(title=name)
    for column in ("#", "Name", "Artist", "Album"):
        table.add_column(column, style="cyan" if column == "#" else None)
    for index, row in enumerate(tracks, start=1):
        cells = list(row[:3]) if isinstance(row, list) else [row]
        table.add_row(str(index), *("" if c is None else str(c) for c in cells))
    console.print(table)


@app.command()
def state(config: ConfigOption = None) -> None:
    """Show whether the player is playing."""
    playing = run_command(config, lambda music: music.get_player_state())
    if playing:
        rprint("[green]▶[/green] Playing")
    else:
        rprint("[yellow]■[/yellow] Not playing")


@app.command()
def activate(config: ConfigOption = None) -> None:
    """Bring the player to the foreground."""
    run_command(config, lambda music: music.activate())


@app.command("play-song")
def play_song(
    name: Annotated[
        Optional[str],
        typer.Option("--name", "-n", help="Song name"),
    ] = None,
    artist: Annotated[
        Optional[str],
        typer.Option("--artist", "-a", help="Artist name"),
    ] = None,
    album: Annotated[
        Optional[str],
        typer.Option("--album", "-b", help="Album name"),
    ] = None,
    config: ConfigOption = None,
) -> None:
    """Play the first track matching the given name, artist and/or album."""
    if not name and not artist and not album:
        rprint("[red]Error:[/red] Please specify --name, --artist or --album")
        raise typer.Exit(1)

    selector = SongSelector(name=name, artist=artist, album=album)
    run_command(config, lambda music: music.play_song(selector))
    rprint("[green]✓[/green] Playing")


@app.command("play-playlist")
def play_playlist(
    name: Annotated[str, typer.Argument(help="Playlist name")],
    config: ConfigOption = None,
) -> None:
    """Play a playlist by name."""
    run_command(config, lambda music: music.play_playlist(name))
    rprint(f"[green]✓[/green] Playing playlist: [cyan]{name}[/cyan]")


@app.command("add-to-playlist")
def add_to_playlist(
    playlist: Annotated[str, typer.Argument(help="Playlist to add the track to")],
    name: Annotated[str, typer.Option("--name", "-n", help="Song name")],
    artist: Annotated[str, typer.Option("--artist", "-a", help="Artist name")],
    album: Annotated[str, typer.Option("--album", "-b", help="Album name")],
    config: ConfigOption = None,
) -> None:
    """Add a track, found by name, artist and album, to a playlist."""
    selector = SongSelector(name=name, artist=artist, album=album)
    run_command(config, lambda music: music.add_to_playlist(selector, playlist))
    rprint(f"[green]✓[/green] Added [cyan]{name}[/cyan] to [cyan]{playlist}[/cyan]")


if __name__ == "__main__":
    app()
