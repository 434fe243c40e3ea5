from __future__ import annotations
from dataclasses import replace
import json
import logging
from pathlib import Path
from typing import Any, List, Optional

import typer
from rich.console import Console

from .auth import AuthClient
from .config import Settings
from .errors import ConfigurationError, JsonClientError
from .jsonrpc_client import JsonClientCaller
from .reporter import Reporter


app = typer.Typer(add_completion=False, no_args_is_help=True)

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def _settings(
    timeout: Optional[float],
    insecure_http: bool,
    trust_all_certs: bool,
    streaming: bool,
    service_version: Optional[str],
) -> Settings:
    """FEATURE_VALUES_* environment settings, overridden by the options given."""
    try:
        base = Settings.from_env()
    except ConfigurationError as e:
        Reporter(Console()).error(e)
        raise typer.Exit(code=2)
    return replace(
        base,
        timeout_s=base.timeout_s if timeout is None else timeout,
        insecure_http_allowed=base.insecure_http_allowed or insecure_http,
        trust_all_certificates=base.trust_all_certificates or trust_all_certs,
        streaming_mode=base.streaming_mode or streaming,
        service_version=service_version or base.service_version,
    )


def _setup_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format=LOG_FORMAT)


def _run(
    url: str,
    method: str,
    args: List[Any],
    has_result: bool,
    auth_required: bool,
    token: Optional[str],
    auth_url: Optional[str],
    settings: Settings,
    save_response: Optional[Path],
) -> None:
    console = Console()
    reporter = Reporter(console)
    auth = AuthClient(auth_url, verify_tls=not settings.trust_all_certificates) if token else None
    try:
        with JsonClientCaller(url, token or None, settings=settings, auth_client=auth) as caller:
            if save_response is not None:
                caller.set_file_for_next_rpc_response(save_response)
            res = caller.call(method, args, has_result=has_result, auth_required=auth_required)
    except JsonClientError as e:
        reporter.error(e)
        raise typer.Exit(code=reporter.exit_code(e))
    finally:
        if auth is not None:
            auth.close()
    if res is None:
        reporter.result(method, None)
    elif len(res) == 1:
        reporter.result(method, res[0])
    else:
        reporter.result(method, res)


@app.callback()
def main() -> None:
    pass


@app.command("status")
def status(
    url: str = typer.Argument(..., help="Service endpoint URL"),
    service: str = typer.Option("KBaseFeatureValues", "--service", help="Service name prefixed to the method"),
    token: Optional[str] = typer.Option(None, "--token", envvar="KB_AUTH_TOKEN"),
    auth_url: Optional[str] = typer.Option(None, "--auth-url"),
    timeout: Optional[float] = typer.Option(None, "--timeout", help="Read timeout in seconds; 0 = none"),
    insecure_http: bool = typer.Option(False, "--insecure-http", help="Allow credentials over plain http."),
    trust_all_certs: bool = typer.Option(False, "--trust-all-certs"),
    service_version: Optional[str] = typer.Option(None, "--service-version"),
    save_response: Optional[Path] = typer.Option(None, "--save-response", help="Also write the raw response body here."),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
):
    """Print server build and version information."""
    _setup_logging(verbose)
    settings = _settings(timeout, insecure_http, trust_all_certs, False, service_version)
    _run(url, f"{service}.status", [], True, False, token, auth_url, settings, save_response)


@app.command("call")
def call(
    url: str = typer.Argument(..., help="Service endpoint URL"),
    method: str = typer.Argument(..., help="Fully qualified method, e.g. KBaseFeatureValues.get_matrix_stat"),
    params: Optional[str] = typer.Option(None, "--params", help="JSON object passed as the single parameter"),
    void: bool = typer.Option(False, "--void", help="The method returns nothing."),
    no_auth: bool = typer.Option(False, "--no-auth", help="The method does not require a credential."),
    token: Optional[str] = typer.Option(None, "--token", envvar="KB_AUTH_TOKEN"),
    auth_url: Optional[str] = typer.Option(None, "--auth-url"),
    timeout: Optional[float] = typer.Option(None, "--timeout", help="Read timeout in seconds; 0 = none"),
    insecure_http: bool = typer.Option(False, "--insecure-http", help="Allow credentials over plain http."),
    trust_all_certs: bool = typer.Option(False, "--trust-all-certs"),
    streaming: bool = typer.Option(False, "--streaming", help="Send the request body in chunks."),
    service_version: Optional[str] = typer.Option(None, "--service-version"),
    save_response: Optional[Path] = typer.Option(None, "--save-response", help="Also write the raw response body here."),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
):
    """Call any method of the service with one JSON parameter object."""
    _setup_logging(verbose)
    args: List[Any] = []
    if params is not None:
        try:
            args.append(json.loads(params))
        except ValueError as e:
            Reporter(Console()).error(ConfigurationError(f"--params is not valid JSON: {e}"))
            raise typer.Exit(code=2)
    settings = _settings(timeout, insecure_http, trust_all_certs, streaming, service_version)
    _run(url, method, args, not void, not no_auth, token, auth_url, settings, save_response)


if __name__ == "__main__":
    app()
