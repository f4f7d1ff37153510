import os

import requests
import typer


app = typer.Typer()
BASE = os.getenv("API_BASE", "http://127.0.0.1:8000")
API_KEY = os.getenv("API_KEY")


def _headers():
    h = {}
    if API_KEY:
        h["X-API-Key"] = API_KEY
    return h


def _parse_pairs(text: str) -> list[list[int]]:
    # "12 40, 33/20; 7-50" -> [[12, 40], [33, 20], [7, 50]]
    for sep in (";", "\n", "|"):
        text = text.replace(sep, ",")
    pairs = []
    for chunk in text.split(","):
        nums = chunk.replace("/", " ").replace("-", " ").split()
        if not nums:
            continue
        if len(nums) != 2:
            raise typer.BadParameter(f"expected two rolls, got {chunk.strip()!r}")
        pairs.append([int(n) for n in nums])
    return pairs


@app.command()
def add(roll1: int, roll2: int):
    r = requests.post(f"{BASE}/rounds", json={"roll1": roll1, "roll2": roll2}, headers=_headers())
    typer.echo(r.json())


@app.command()
def bulk(text: str):
    r = requests.post(f"{BASE}/rounds/bulk", json={"pairs": _parse_pairs(text)}, headers=_headers())
    typer.echo(r.json())


@app.command()
def clear(yes: bool = typer.Option(False, "--yes", help="skip the confirmation prompt")):
    if not yes:
        typer.confirm("Delete all rounds? This cannot be undone.", abort=True)
    r = requests.delete(f"{BASE}/rounds", headers=_headers())
    typer.echo(r.json())


@app.command()
def stats():
    r = requests.get(f"{BASE}/stats", headers=_headers())
    typer.echo(r.json())


@app.command()
def predict():
    r = requests.get(f"{BASE}/predict", headers=_headers())
    typer.echo(r.json())


@app.command()
def history(limit: int = 50):
    r = requests.get(f"{BASE}/history", params={"limit": limit}, headers=_headers())
    typer.echo(r.json())


@app.command()
def serve(host: str = "127.0.0.1", port: int = 8000):
    import uvicorn
    uvicorn.run("dice_analyzer.api.main:app", host=host, port=port)


if __name__ == "__main__":
    app()
