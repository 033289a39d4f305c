import json
import sys
from pathlib import Path

from fuser.clients import FusionClient
from fuser.config import FUSER_API_TOKEN, FUSER_API_URL, FUSER_MAX_POLL_ATTEMPTS, FUSER_POLL_INTERVAL
from fuser.errors import FuserError
from fuser.models import SavedCollage
from fuser.services import Composition, ControllerState, FusionRunner, JobController

USAGE = """Usage:
  python main.py fuse <collage.json>
  python main.py upload <track.mp3> <owner_id>"""


def fuse(path: str) -> int:
    record = json.loads(Path(path).read_text())
    composition = Composition.from_saved(SavedCollage.from_record(record))
    grid = composition.grid
    print(f"Loaded collage {record['id']}: {grid.row_count}x{grid.column_count}, "
          f"{grid.occupied_count} placed", flush=True)

    client = FusionClient(FUSER_API_URL, FUSER_API_TOKEN)
    controller = JobController(client)
    runner = FusionRunner(
        controller,
        poll_interval=FUSER_POLL_INTERVAL,
        max_attempts=FUSER_MAX_POLL_ATTEMPTS,
    )

    snapshot = runner.run(*composition.snapshot())

    print("\n=== RESULT ===")
    if snapshot.state == ControllerState.SUCCEEDED:
        print(controller.result_url)
        return 0
    print(f"ERROR: {controller.error_message}")
    return 1


def upload(path: str, owner_id: str) -> int:
    file_path = Path(path)
    client = FusionClient(FUSER_API_URL, FUSER_API_TOKEN)
    ack = client.upload_asset(file_path.name, file_path.read_bytes(), owner_id)
    if ack.ok:
        print(f"Uploaded {file_path.name}")
        return 0
    print(f"Upload failed with status {ack.status_code}")
    return 1


def main(argv: list[str]) -> int:
    try:
        if len(argv) >= 2 and argv[0] == "fuse":
            return fuse(argv[1])
        if len(argv) >= 3 and argv[0] == "upload":
            return upload(argv[1], argv[2])
    except (FuserError, ValueError, OSError) as e:
        print(f"Error: {e}")
        return 1

    print(USAGE)
    return 2


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
