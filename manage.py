# manage.py
import sys

from app import create_app


def _library(app):
    return app.extensions['library_service']


def init_store():
    """Creates the upload directory and an empty library document."""
    app = create_app()
    library = _library(app)
    print(f"Upload directory: {library.uploads.upload_dir}")
    if library.store.exists():
        print(f"Library document already exists: {library.store.data_file}")
        return
    library.store.save(library.store.load())
    print(f"Created empty library document: {library.store.data_file}")


def prune():
    """Removes file tracks whose audio file is missing and unlinks them from playlists."""
    app = create_app()
    removed = _library(app).prune_missing_files()
    for track in removed:
        print(f"Removed {track.id}: {track.title} ({track.path})")
    print(f"Pruned {len(removed)} track(s).")


COMMANDS = {
    'init': init_store,
    'prune': prune,
}


def main(argv):
    if len(argv) < 2:
        print("No command provided. Usage: python manage.py [init|prune]")
        return 1
    command = COMMANDS.get(argv[1])
    if command is None:
        print(f"Unknown command: {argv[1]}")
        print("Usage: python manage.py [init|prune]")
        return 1
    command()
    return 0


if __name__ == '__main__':
    sys.exit(main(sys.argv))
