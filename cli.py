# cli.py
import argparse
import os
from datetime import datetime
from typing import Any, Dict, List, Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich import box

from prompt_toolkit import prompt
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.styles import Style as PromptStyle

import requests

from sdk.products import ProductsApiError, ProductsClient

console = Console()

custom_style = PromptStyle.from_dict({
    'completion-menu.completion': 'bg:#008888 #ffffff',
    'completion-menu.completion.current': 'bg:#00aaaa #000000',
    'scrollbar.background': 'bg:#88aaaa',
    'scrollbar.button': 'bg:#222222',
})


# ---------------------------
# Display helpers
# ---------------------------
def show_products(products: List[Dict[str, Any]], pagination: Optional[Dict[str, Any]] = None):
    if not products:
        console.print("[italic yellow]No products found[/italic yellow]")
        return

    table = Table(
        title="📦 Products Catalog",
        box=box.ROUNDED,
        header_style="bold cyan",
        title_style="bold magenta",
        show_lines=True
    )
    table.add_column("ID", style="dim", width=12)
    table.add_column("Name", style="bold", width=20)
    table.add_column("Description", width=30)
    table.add_column("Price", justify="right", width=10)
    table.add_column("Category", width=15)
    table.add_column("Stock", width=8)

    for p in products:
        stock = "[green]yes[/green]" if p.get("inStock") else "[red]no[/red]"
        table.add_row(
            p.get("id", "N/A"),
            p.get("name", "N/A"),
            p.get("description", ""),
            f"${p.get('price', 0):.2f}",
            p.get("category", "N/A"),
            stock,
        )
    console.print(table)

    if pagination:
        console.print(
            f"[dim]Page {pagination['currentPage']} of {pagination['totalPages']} "
            f"({pagination['totalProducts']} products)[/dim]"
        )


def show_stats(stats: Dict[str, Any]):
    table = Table(box=box.ROUNDED, header_style="bold yellow", show_header=False)
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")
    table.add_row("Total products", str(stats.get("totalProducts", 0)))
    table.add_row("In stock", f"[green]{stats.get('inStock', 0)}[/green]")
    table.add_row("Out of stock", f"[red]{stats.get('outOfStock', 0)}[/red]")
    table.add_row("Average price", f"${stats.get('averagePrice', 0):.2f}")
    for name, count in stats.get("categories", {}).items():
        table.add_row(f"  {name}", str(count))
    console.print(Panel(table, title="📊 Product statistics", border_style="yellow"))


def show_status(message: str, is_success: bool = True):
    style = "green" if is_success else "red"
    return Panel.fit(f"[{style}]{message}[/{style}]", title="Status")


def try_api(fn, *args, success_msg: Optional[str] = None, **kwargs):
    """
    Calls fn(*args, **kwargs) behind a spinner.
    API errors are printed and turned into None.
    """
    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            transient=True,
        ) as progress:
            progress.add_task(description="Processing...", total=None)
            result = fn(*args, **kwargs)
        if success_msg:
            console.print(show_status(success_msg, True))
        return result
    except ProductsApiError as e:
        console.print(show_status(f"Error: {e.name}: {e.message}", False))
        return None
    except requests.RequestException as e:
        console.print(show_status(f"Error: request failed: {e}", False))
        return None


# ---------------------------
# Interactive shell
# ---------------------------
def prompt_with_autocomplete(message: str, completer=None, default: str = ""):
    return prompt(f"{message} ", completer=completer, style=custom_style, default=default)


def ask_price(message: str, default: float = 10.0) -> float:
    while True:
        raw = Prompt.ask(message, default=str(default))
        try:
            return float(raw)
        except ValueError:
            console.print("[red]Please enter a valid number.[/red]")


def ask_product_fields(current: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    current = current or {}
    return {
        "name": prompt_with_autocomplete("Name", default=current.get("name", "")),
        "description": prompt_with_autocomplete("Description", default=current.get("description", "")),
        "price": ask_price("💰 Price", default=current.get("price", 10.0)),
        "category": prompt_with_autocomplete("🏷️ Category", default=current.get("category", "")),
        "in_stock": Confirm.ask("In stock?", default=current.get("inStock", True)),
    }


def shell(c: ProductsClient):
    console.clear()
    now = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    console.print(Panel(f"[bold blue]Products API shell[/bold blue]  [dim]{c.base_url}  {now}[/dim]"))

    product_ids: List[str] = []

    def id_completer():
        return WordCompleter(product_ids, ignore_case=True)

    def refresh_ids():
        page = try_api(c.list_products, limit=100)
        if page is not None:
            product_ids[:] = [p["id"] for p in page["products"]]

    refresh_ids()

    options = [
        ("1", "📦 List products"),
        ("2", "🔍 Search products"),
        ("3", "ℹ️ Get product by ID"),
        ("4", "➕ Create product"),
        ("5", "✏️ Update product"),
        ("6", "🗑️ Delete product"),
        ("7", "📊 Statistics"),
        ("q", "👋 Quit"),
    ]

    while True:
        menu_table = Table.grid(padding=(0, 2))
        menu_table.add_column("Key", style="bold cyan", width=4)
        menu_table.add_column("Option", width=30)
        for row in options:
            menu_table.add_row(*row)
        console.print(Panel(menu_table, title="📋 Menu", border_style="yellow"))

        choice = prompt_with_autocomplete(
            "\nChoose an option",
            completer=WordCompleter([k for k, _ in options] + ["quit", "exit"])
        ).strip()

        if choice == "1":
            category = prompt_with_autocomplete("Category filter (blank for all)").strip() or None
            page = try_api(c.list_products, category=category)
            if page is not None:
                show_products(page["products"], page["pagination"])

        elif choice == "2":
            term = prompt_with_autocomplete("Enter search term")
            page = try_api(c.list_products, search=term, success_msg=f"Search for '{term}' completed")
            if page is not None:
                show_products(page["products"], page["pagination"])

        elif choice == "3":
            pid = prompt_with_autocomplete("Enter product ID", completer=id_completer())
            product = try_api(c.get_product, pid)
            if product:
                show_products([product])

        elif choice == "4":
            fields = ask_product_fields()
            product = try_api(c.create_product, success_msg="Product created", **fields)
            if product:
                show_products([product])
                refresh_ids()

        elif choice == "5":
            pid = prompt_with_autocomplete("Enter product ID", completer=id_completer())
            current = try_api(c.get_product, pid)
            if current:
                fields = ask_product_fields(current)
                product = try_api(c.update_product, pid, success_msg=f"Product {pid} updated", **fields)
                if product:
                    show_products([product])

        elif choice == "6":
            pid = prompt_with_autocomplete("Enter product ID", completer=id_completer())
            if Confirm.ask(f"Delete product {pid}?"):
                try_api(c.delete_product, pid, success_msg=f"Product {pid} deleted")
                refresh_ids()

        elif choice == "7":
            stats = try_api(c.stats)
            if stats:
                show_stats(stats)

        elif choice.lower() in ("q", "quit", "exit"):
            console.print("[bold]Bye 👋[/bold]")
            break

        else:
            console.print(show_status(f"Unknown option '{choice}'", False))


# ---------------------------
# Command line
# ---------------------------
def _bool_arg(value: str) -> bool:
    v = value.lower()
    if v in ("true", "yes", "1"):
        return True
    if v in ("false", "no", "0"):
        return False
    raise argparse.ArgumentTypeError("expected true or false")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Products API CLI")
    parser.add_argument("--base-url", default=os.getenv("PRODUCTS_API_URL", "http://127.0.0.1:3000"))
    parser.add_argument("--api-key", default=os.getenv("API_KEY"), help="Key sent in X-API-Key for writes")
    subparsers = parser.add_subparsers(dest="command", required=True)

    lp = subparsers.add_parser("list", help="List products")
    lp.add_argument("--category", help="Filter by category (case-insensitive)")
    lp.add_argument("--in-stock", type=_bool_arg, help="Filter by stock status (true/false)")
    lp.add_argument("--search", help="Search name and description")
    lp.add_argument("--page", type=int)
    lp.add_argument("--limit", type=int)

    gp = subparsers.add_parser("get", help="Get a product by its ID")
    gp.add_argument("product_id")

    for cmd, help_text in (("create", "Create a product"), ("update", "Replace a product's fields")):
        sp = subparsers.add_parser(cmd, help=help_text)
        if cmd == "update":
            sp.add_argument("product_id")
        sp.add_argument("--name", required=True)
        sp.add_argument("--description", required=True)
        sp.add_argument("--price", type=float, required=True)
        sp.add_argument("--category", required=True)
        sp.add_argument("--in-stock", type=_bool_arg, default=True)

    dp = subparsers.add_parser("delete", help="Delete a product")
    dp.add_argument("product_id")

    subparsers.add_parser("stats", help="Show product statistics")
    subparsers.add_parser("shell", help="Interactive menu")
    return parser


def main(argv: Optional[List[str]] = None, client: Optional[ProductsClient] = None) -> int:
    args = build_parser().parse_args(argv)
    c = client or ProductsClient(base_url=args.base_url, api_key=args.api_key)

    try:
        if args.command == "list":
            page = c.list_products(args.category, args.in_stock, args.search, args.page, args.limit)
            show_products(page["products"], page["pagination"])
        elif args.command == "get":
            show_products([c.get_product(args.product_id)])
        elif args.command == "create":
            show_products([c.create_product(args.name, args.description, args.price, args.category, args.in_stock)])
        elif args.command == "update":
            show_products([c.update_product(args.product_id, args.name, args.description,
                                            args.price, args.category, args.in_stock)])
        elif args.command == "delete":
            c.delete_product(args.product_id)
            console.print(show_status(f"Product {args.product_id} deleted"))
        elif args.command == "stats":
            show_stats(c.stats())
        elif args.command == "shell":
            shell(c)
    except ProductsApiError as e:
        console.print(show_status(f"Error: {e.name}: {e.message}", False))
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
