"""
Command-line entry point for the Bitcoin.de API client.

Without a subcommand it prints the account overview and the BTC/EUR rates.
Subcommands expose a few read-only calls, a generic signed call, encrypted
credential storage and configuration checks.
"""

import json
import sys
from pathlib import Path
from typing import Optional, Tuple

import click

from .api.client import BitcoinDeClient
from .api.credentials import ApiCredentials, CredentialError, CredentialManager
from .config.cli import DEFAULT_CONFIG_PATH, config as config_group
from .config.manager import ConfigManager, ConfigValidationError
from .data.enums import OrderType, TradingPair
from .errors import ApiError, BitcoinDeAPIError, describe_error_code
from .logging import get_logger, get_logger_manager, initialize_logging

logger = get_logger(__name__)


def _fail(message: str) -> None:
    click.echo(click.style(f"✗ {message}", fg='red'), err=True)
    sys.exit(1)


def _describe_error(error: BitcoinDeAPIError) -> str:
    if isinstance(error, ApiError) and error.codes:
        codes = ', '.join(describe_error_code(code) for code in error.codes)
        return f"{error.message} [HTTP {error.status_code}; codes {codes}]"
    if error.status_code:
        return f"{error.message} [HTTP {error.status_code}]"
    return error.message


def _record_call(method_name: str, error: Optional[BitcoinDeAPIError] = None) -> None:
    manager = get_logger_manager()
    if manager is None:
        return
    if error is None:
        manager.log_api_call(method_name, 'ok')
    else:
        manager.log_api_call(method_name, error.error_code or 'error',
                             {'status_code': error.status_code, 'message': error.message})


def _load_config(config_path: Optional[str]) -> ConfigManager:
    if config_path is None and Path(DEFAULT_CONFIG_PATH).exists():
        config_path = DEFAULT_CONFIG_PATH
    manager = ConfigManager(config_path)
    try:
        manager.load_config()
    except ConfigValidationError as e:
        _fail(f"Invalid configuration: {e.message}")
    return manager


def _setup_logging(manager: ConfigManager) -> None:
    settings = manager.get_section('logging')
    initialize_logging(
        log_dir=settings['log_dir'],
        log_level=settings['level'],
        structured_format=settings['structured'],
        console_output=settings['console'],
    )


def _make_client(ctx: click.Context) -> BitcoinDeClient:
    """Resolve credentials and build a client; missing credentials are fatal."""
    if ctx.obj.get('client') is not None:
        return ctx.obj['client']

    manager: ConfigManager = ctx.obj['config']
    try:
        credentials = manager.get_credentials(ctx.obj['api_key'], ctx.obj['api_secret'])
    except (ConfigValidationError, CredentialError) as e:
        _fail(str(e))

    api_settings = manager.get_section('api')
    client = BitcoinDeClient(
        credentials.api_key,
        credentials.api_secret,
        base_url=api_settings['base_url'],
        timeout=api_settings['timeout'],
    )
    ctx.obj['client'] = client
    ctx.call_on_close(client.close)
    return client


def _print_account_info(client: BitcoinDeClient) -> None:
    info = client.show_account_info()
    click.echo("Balances:")
    for currency, amounts in sorted(info.data.balances.items()):
        click.echo(f"  {currency.upper():<6} total {amounts.total_amount}  "
                   f"available {amounts.available_amount}  reserved {amounts.reserved_amount}")
    click.echo(f"Credits left: {info.credits}")


def _print_rates(client: BitcoinDeClient, trading_pair: TradingPair) -> None:
    response = client.show_rates(trading_pair)
    rates = response.rates
    click.echo(f"{trading_pair.as_str()} weighted rate: {rates.rate_weighted} "
               f"(3h {rates.rate_weighted_3h}, 12h {rates.rate_weighted_12h})")


def _parse_parameters(parameters: Tuple[str, ...]) -> dict:
    parsed = {}
    for item in parameters:
        name, separator, value = item.partition('=')
        if not separator or not name:
            raise click.BadParameter(f"expected name=value, got {item!r}", param_hint='--param')
        parsed[name] = value
    return parsed


@click.group(invoke_without_command=True)
@click.option('--config-path', '-c', default=None,
              help=f'Path to configuration file (default: {DEFAULT_CONFIG_PATH} if present)')
@click.option('--api-key', envvar='API_KEY', default=None, help='Bitcoin.de API key')
@click.option('--api-secret', envvar='API_SECRET', default=None, help='Bitcoin.de API secret')
@click.version_option(package_name='bitcoin-de-client')
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[str], api_key: Optional[str], api_secret: Optional[str]):
    """Bitcoin.de Trading API v4 client."""
    ctx.ensure_object(dict)
    manager = _load_config(config_path)
    _setup_logging(manager)
    ctx.obj.update({'config': manager, 'api_key': api_key, 'api_secret': api_secret})

    if ctx.invoked_subcommand is not None:
        return

    client = _make_client(ctx)
    logger.info("Showing account overview")
    for label, action in (
        ("account info", lambda: _print_account_info(client)),
        ("rates", lambda: _print_rates(client, TradingPair.BTCEUR)),
    ):
        try:
            action()
        except BitcoinDeAPIError as e:
            log_manager = get_logger_manager()
            if log_manager is not None:
                log_manager.log_error_with_context(e, {'command': 'overview', 'call': label})
            click.echo(click.style(f"✗ Failed to fetch {label}: {_describe_error(e)}", fg='red'))


@cli.command()
@click.argument('trading_pair', default='btceur')
@click.pass_context
def rates(ctx: click.Context, trading_pair: str):
    """Show weighted rates of TRADING_PAIR."""
    try:
        pair = TradingPair.from_str(trading_pair)
        _print_rates(_make_client(ctx), pair)
    except BitcoinDeAPIError as e:
        _fail(_describe_error(e))


@cli.command()
@click.pass_context
def permissions(ctx: click.Context):
    """Show the permissions of the API key."""
    try:
        response = _make_client(ctx).show_permissions()
    except BitcoinDeAPIError as e:
        _fail(_describe_error(e))
    for permission in response.permissions:
        click.echo(f"  {permission}")


@cli.command()
@click.argument('trading_pair')
@click.option('--type', 'order_type', type=click.Choice([t.value for t in OrderType]),
              default=OrderType.BUY.value, help='Side of the orderbook')
@click.pass_context
def orderbook(ctx: click.Context, trading_pair: str, order_type: str):
    """Show the orderbook of TRADING_PAIR."""
    try:
        pair = TradingPair.from_str(trading_pair)
        response = _make_client(ctx).show_orderbook(pair, OrderType.from_str(order_type))
    except BitcoinDeAPIError as e:
        _fail(_describe_error(e))

    if not response.orders:
        click.echo("No orders.")
        return
    for order in response.orders:
        click.echo(f"  {order.order_id}  price {order.price}  "
                   f"amount {order.min_amount_currency_to_trade}-{order.max_amount_currency_to_trade}")


@cli.command()
@click.argument('method_name')
@click.option('--param', '-p', 'parameters', multiple=True, help='Parameter as name=value (repeatable)')
@click.pass_context
def call(ctx: click.Context, method_name: str, parameters: Tuple[str, ...]):
    """Send a signed request for METHOD_NAME and print the JSON response."""
    params = _parse_parameters(parameters)
    try:
        result = _make_client(ctx).execute(method_name, params)
    except BitcoinDeAPIError as e:
        _record_call(method_name, e)
        _fail(_describe_error(e))
    _record_call(method_name)
    click.echo(json.dumps(result, indent=2, default=str, ensure_ascii=False))


@cli.group()
def credentials():
    """Encrypted credential storage."""
    pass


@credentials.command()
@click.option('--output', '-o', default='config/credentials.json', help='Path of the encrypted file')
@click.option('--password', envvar='CREDENTIAL_PASSWORD', prompt=True, hide_input=True,
              confirmation_prompt=True, help='Encryption password')
@click.pass_context
def store(ctx: click.Context, output: str, password: str):
    """Encrypt the API key and secret and write them to a file."""
    api_key = ctx.obj.get('api_key') or click.prompt('API key')
    api_secret = ctx.obj.get('api_secret') or click.prompt('API secret', hide_input=True)
    try:
        CredentialManager(password).store(ApiCredentials(api_key, api_secret), output)
    except (CredentialError, OSError) as e:
        _fail(f"Failed to store credentials: {e}")
    click.echo(click.style(f"✓ Encrypted credentials written to {output}", fg='green'))
    click.echo("Set api.credentials_file in the configuration to use them.")


cli.add_command(config_group)


def main():
    """Main entry point for the console script."""
    cli(obj={})


if __name__ == "__main__":
    main()
