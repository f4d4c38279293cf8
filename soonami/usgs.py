import json
import logging
import urllib.parse
from typing import cast

from dacite import DaciteError, from_dict

from soonami import http
from soonami.data import quake

logger = logging.getLogger(__name__)

USGS_QUERY_URL = "https://earthquake.usgs.gov/fdsnws/event/1/query"

# Served over plain http on purpose; request() upgrades it to https
DEFAULT_URL = (
    "http://earthquake.usgs.gov/fdsnws/event/1/query"
    "?format=geojson&starttime=2014-01-01&endtime=2014-12-01&minmagnitude=7"
)


def build_query_url(
    starttime: str,
    endtime: str,
    minmagnitude: float | None = None,
    base: str = USGS_QUERY_URL,
) -> str:
    """
    Build an FDSN event query asking for GeoJSON between two dates.
    """
    params: dict[str, object] = {
        "format": "geojson",
        "starttime": starttime,
        "endtime": endtime,
    }
    if minmagnitude is not None:
        params["minmagnitude"] = minmagnitude

    return f"{base}?{urllib.parse.urlencode(params)}"


class Fetcher:
    def __init__(
        self,
        url: str = DEFAULT_URL,
        connect_timeout: float = http.CONNECT_TIMEOUT,
        read_timeout: float = http.READ_TIMEOUT,
    ):
        self.connect_timeout = connect_timeout
        self.read_timeout = read_timeout
        self.url: str | None
        try:
            self.url = http.validate_url(url)
        except http.InvalidURLError as e:
            logger.error(f"error with creating URL: {e}")
            self.url = None

    def fetch(self) -> str:
        """
        Return the response body, or an empty string when there is no URL
        or the server answered with anything but a 200.
        """
        if self.url is None:
            logger.info("no URL available, skipping request")
            return ""

        response = http.request(
            url=self.url,
            method="GET",
            connect_timeout=self.connect_timeout,
            read_timeout=self.read_timeout,
        )
        return response.body


def extract_feature(text: str) -> quake.QuakeResult:
    """
    Pull title, time and tsunami out of the first feature in a GeoJSON
    feature collection. Malformed input never raises; it comes back as
    NotAvailable.
    """
    if not text or not text.strip():
        return quake.NotAvailable(reason="empty response")

    try:
        json_data = json.loads(text)
    except json.JSONDecodeError as e:
        logger.error(f"problem parsing the earthquake JSON results: {e}")
        return quake.NotAvailable(reason=f"invalid JSON: {e}")

    if not isinstance(json_data, dict) or not isinstance(
        json_data.get("features"), list
    ):
        logger.error("problem parsing the earthquake JSON results: no features array")
        return quake.NotAvailable(reason="missing features")

    features = cast(list[object], json_data["features"])
    if len(features) == 0:
        return quake.NotAvailable(reason="no features")

    first = features[0]
    properties = first.get("properties") if isinstance(first, dict) else None
    if not isinstance(properties, dict):
        logger.error("problem parsing the earthquake JSON results: no properties")
        return quake.NotAvailable(reason="missing properties")

    try:
        props = from_dict(data_class=quake.QuakeProperties, data=properties)
    except DaciteError as e:
        logger.error(f"problem parsing the earthquake JSON results: {e}")
        return quake.NotAvailable(reason=f"bad properties: {e}")

    # bool is an int subclass, so dacite lets JSON true/false through
    if isinstance(props.time, bool) or isinstance(props.tsunami, bool):
        logger.error("problem parsing the earthquake JSON results: boolean number")
        return quake.NotAvailable(reason="bad properties: boolean number")

    logger.debug(
        f"event title: {props.title}, time: {props.time}, alert: {props.tsunami}"
    )
    return quake.Found(
        record=quake.EarthquakeRecord(
            title=props.title, time_ms=props.time, tsunami=props.tsunami
        )
    )


def get_quake_data(fetcher: Fetcher) -> quake.QuakeResult:
    """
    Run one fetch and extraction. Only http.FetchError escapes.
    """
    return extract_feature(fetcher.fetch())
