"""CLI commands for the catalog and its cache."""

from __future__ import annotations

import json

import click

from storefront.application.show_catalog import ShowCatalogHandler
from storefront.infrastructure.bootstrap import catalog_cache, catalog_source


@click.command("show")
def catalog_show() -> None:
    """Show the catalog as the cart sees it (cached)."""
    catalog = catalog_cache().load()

    if catalog.is_empty:
        click.echo("Catalog is empty or unavailable.")
        return

    click.echo(f"{'ID':<24} {'Name':<28} {'Price':>10} {'Lining':>7}")
    click.echo("-" * 72)
    for p in catalog.products:
        lining = "yes" if p.has_lining_option else "no"
        click.echo(f"{p.id:<24} {p.name:<28} {str(p.price):>10} {lining:>7}")
    click.echo()
    click.echo("Outer fabrics: " + ", ".join(f.id for f in catalog.outer_fabrics))
    click.echo("Inner fabrics: " + ", ".join(f.id for f in catalog.inner_fabrics))


@click.command("refresh")
def catalog_refresh() -> None:
    """Fetch the catalog now and replace the cached snapshot."""
    catalog = catalog_cache().refresh()
    if catalog is None:
        raise click.ClickException("Failed to fetch products")
    click.echo(f"Catalog refreshed: {len(catalog.products)} product(s).")


@click.command("export")
def catalog_export() -> None:
    """Print the catalog payload served to carts, as JSON."""
    payload = ShowCatalogHandler(catalog_source=catalog_source()).handle()
    click.echo(json.dumps(payload, indent=2, ensure_ascii=False))
    if not payload["success"]:
        raise SystemExit(1)
