"""Command that downloads a model file into the local model directory."""

from __future__ import annotations

import os
import sys
from pathlib import Path

import httpx
from dotenv import find_dotenv, load_dotenv
from tqdm import tqdm

DEFAULT_MODEL_HOME = "./pyano_home/models"
USAGE = "Usage: pull <model_path> [--quant <quant>]"


def init() -> None:
    """Load environment variables from a .env file, if there is one."""
    load_dotenv(find_dotenv(usecwd=True))


def model_save_dir(
    model_path: str, quant: str | None = None, model_home: str | None = None
) -> str:
    """Directory a model is saved to: ``<home>/<name>[/<quant>]``.

    The name is the last path segment of ``model_path`` up to its first dash.
    ``model_home`` defaults to ``$MODEL_HOME`` or ``./pyano_home/models``.
    """
    model_name = model_path.split("/")[-1].split("-")[0]
    relative = f"{model_name}/{quant}" if quant is not None else model_name
    if model_home is None:
        model_home = os.environ.get("MODEL_HOME", DEFAULT_MODEL_HOME)
    return f"{model_home}/{relative}"


def download_model_file(url: str, save_dir: str | os.PathLike[str]) -> Path | None:
    """Download ``url`` into ``save_dir`` with a progress bar.

    Returns the written file, or None when the server refuses the download.
    """
    file_name = url.split("/")[-1] or "model"
    file_path = Path(save_dir) / file_name
    with httpx.stream("GET", url, follow_redirects=True, timeout=None) as response:
        if not response.is_success:
            print(
                f"Failed to download model: {response.status_code} {response.reason_phrase}",
                file=sys.stderr,
            )
            return None
        length = response.headers.get("content-length")
        total = int(length) if length and length.isdigit() else None
        with file_path.open("wb") as out, tqdm(
            total=total, unit="B", unit_scale=True, desc=file_name
        ) as progress:
            for chunk in response.iter_bytes():
                out.write(chunk)
                progress.update(len(chunk))
    print(f"Model downloaded successfully to {save_dir}")
    return file_path


def main(argv: list[str] | None = None) -> int:
    """Entry point: ``pull <model_path> [--quant <quant>]``."""
    init()
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        print(USAGE, file=sys.stderr)
        return 1

    quant: str | None = None
    for flag, value in zip(args, args[1:]):
        if flag == "--quant":
            quant = value

    model_path = args[0]
    if quant is not None:
        print(f"Quant value provided: {quant}")
    else:
        print("No quant value provided, proceeding without it.")

    save_dir = model_save_dir(model_path, quant)
    print(f"Saving model files to: {save_dir}")
    try:
        Path(save_dir).mkdir(parents=True, exist_ok=True)
        download_model_file(model_path, save_dir)
    except (httpx.HTTPError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    print("Model files downloaded successfully.", end="")
    return 0


if __name__ == "__main__":
    sys.exit(main())