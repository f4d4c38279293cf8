import json
import logging
import sys
from pathlib import Path

import click

from soonami import display, glyphs, http, usgs
from soonami.util import log, system
from soonami.worker import QuakeWorker

context_settings = dict(help_option_names=["-h", "--help"])
logger: logging.Logger = logging.getLogger("soonami")


def print_output(text: str, output_class: str, tooltip: str, use_json: bool):
    if use_json:
        output = {"text": text, "class": output_class, "tooltip": tooltip}
        click.echo(json.dumps(output))
    else:
        click.echo(text)
        click.echo(output_class)
        click.echo(tooltip)


@click.command(
    help="Show the first earthquake returned by a USGS query",
    context_settings=context_settings,
)
@click.option("-u", "--url", default=usgs.DEFAULT_URL, help="The USGS query URL")
@click.option("-s", "--start", help="Query start date, e.g., 2014-01-01")
@click.option("-e", "--end", help="Query end date, e.g., 2014-12-01")
@click.option("-m", "--magnitude", type=float, help="Minimum magnitude")
@click.option(
    "--connect-timeout",
    type=float,
    default=http.CONNECT_TIMEOUT,
    show_default=True,
    help="Connect timeout (in seconds)",
)
@click.option(
    "--read-timeout",
    type=float,
    default=http.READ_TIMEOUT,
    show_default=True,
    help="Read timeout (in seconds)",
)
@click.option(
    "-j", "--json", "use_json", default=False, is_flag=True, help="Print JSON output"
)
@click.option(
    "-l",
    "--logfile",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Log file (defaults to the cache directory)",
)
@click.option("-d", "--debug", default=False, is_flag=True, help="Enable debug logging")
def main(
    url: str,
    start: str | None,
    end: str | None,
    magnitude: float | None,
    connect_timeout: float,
    read_timeout: float,
    use_json: bool,
    logfile: Path | None,
    debug: bool,
):
    global logger

    if logfile is None:
        cache_dir = system.get_cache_directory()
        logfile = cache_dir / "soonami.log" if cache_dir else None
    logger = log.configure(debug=debug, name="soonami", logfile=logfile)

    if start or end:
        if not (start and end):
            raise click.UsageError("--start and --end must be used together")
        url = usgs.build_query_url(starttime=start, endtime=end, minmagnitude=magnitude)

    logger.info(f"entering function with url={url}")

    fetcher = usgs.Fetcher(
        url=url, connect_timeout=connect_timeout, read_timeout=read_timeout
    )
    worker = QuakeWorker(fetcher=fetcher).start()

    try:
        result = worker.wait()
    except http.FetchError as e:
        logger.error(f"unable to fetch earthquake data: {e}")
        print_output(
            text=f"{glyphs.md_alert}{glyphs.icon_spacer}unable to reach USGS",
            output_class="error",
            tooltip=str(e),
            use_json=use_json,
        )
        sys.exit(1)

    if use_json:
        text, output_class, tooltip = display.render_output(result=result)
        print_output(
            text=text, output_class=output_class, tooltip=tooltip, use_json=True
        )
    else:
        for line in display.render_lines(result=result):
            click.echo(line)


if __name__ == "__main__":
    main()
