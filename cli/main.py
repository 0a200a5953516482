"""CLI tool for accessing prescriptions and browsing the local history"""
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional
import click

from medseal.core.accessor import PrescriptionAccessor
from medseal.core.config import Config
from medseal.core.remote_store import StaticRemoteStore
from medseal.services.history_cache import HistoryCache
from medseal.services.history_rehydrator import rehydrate
from medseal.services.history_storage import FileStorage
from medseal.types.prescription import AccessedPrescription


def _open_history(data_dir: Optional[Path]) -> HistoryCache:
    cache = HistoryCache(FileStorage(Config.history_path(data_dir)))
    cache.load()
    return cache


def _format_ms(timestamp_ms: int) -> str:
    return datetime.fromtimestamp(timestamp_ms / 1000).strftime("%Y-%m-%d %H:%M")


def _echo_prescription(accessed: AccessedPrescription) -> None:
    prescription = accessed.prescription
    click.echo(f"\n{'='*50}")
    click.echo(f"Prescription: {prescription.id}")
    click.echo(f"Patient: {prescription.patient_name or '-'}")
    if prescription.notes:
        click.echo(f"Notes: {prescription.notes}")
    click.echo(f"Medicines: {len(accessed.medicine_lines)}")
    for line in accessed.medicine_lines:
        medicine = line.medicine
        click.echo(f"  - {medicine.name} ({line.custom_dosage or medicine.dosage or 'N/A'})")
        click.echo(f"    Frequency: {medicine.frequency or 'N/A'}")
        click.echo(f"    Duration: {medicine.duration or 'N/A'}")
        if line.custom_instructions:
            click.echo(f"    Instructions: {line.custom_instructions}")
    if accessed.degraded_count:
        click.echo(f"Warning: details unavailable for {accessed.degraded_count} medicine(s)")
    click.echo(f"{'='*50}")


@click.group()
@click.option(
    "--data-dir",
    "-d",
    type=click.Path(file_okay=False),
    default=None,
    help=f"Directory holding the prescription history (default: {Config.DATA_DIR})"
)
@click.pass_context
def main(ctx: click.Context, data_dir: Optional[str]):
    """Access prescriptions and browse the offline history."""
    logging.basicConfig(level=Config.LOG_LEVEL, format="%(levelname)s: %(message)s")
    ctx.ensure_object(dict)
    ctx.obj["data_dir"] = Path(data_dir) if data_dir else None


@main.command()
@click.argument("prescription_id")
@click.argument("code")
@click.option(
    "--store",
    "-s",
    type=click.Path(exists=True, dir_okay=False),
    required=True,
    help="JSON export of the remote prescription store"
)
@click.pass_context
def access(ctx: click.Context, prescription_id: str, code: str, store: str):
    """
    Access a prescription by ID and verification CODE.
    """
    try:
        remote_store = StaticRemoteStore.from_file(store)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    data_dir = ctx.obj["data_dir"]
    Config.ensure_directories(data_dir)
    accessor = PrescriptionAccessor(remote_store, _open_history(data_dir))

    result = accessor.access(prescription_id, code)
    if not result.success:
        click.echo(f"Error: {result.message}", err=True)
        sys.exit(1)

    _echo_prescription(result.value)


@main.command()
@click.pass_context
def history(ctx: click.Context):
    """List previously accessed prescriptions, most recent first."""
    entries = _open_history(ctx.obj["data_dir"]).list()
    if not entries:
        click.echo("No prescription history")
        return

    for entry in entries:
        click.echo(
            f"{entry.id}  {entry.patient_name or '-'}  "
            f"{entry.medicines_count} medicine(s)  accessed {_format_ms(entry.accessed_at)}"
        )


@main.command()
@click.argument("entry_id")
@click.pass_context
def show(ctx: click.Context, entry_id: str):
    """
    Show a prescription from history without contacting the store.
    """
    entry = _open_history(ctx.obj["data_dir"]).get(entry_id)
    if entry is None:
        click.echo(f"No history entry for prescription {entry_id}", err=True)
        sys.exit(1)

    _echo_prescription(rehydrate(entry))


if __name__ == "__main__":
    main()
