from unittest import mock

import pytest

from conftest import QUAKE_BODY
from soonami import http, usgs
from soonami.data import quake


class TestExtractFeature:
    """Unit tests for pulling the first feature out of a GeoJSON body"""

    def test_first_feature(self):
        result = usgs.extract_feature(QUAKE_BODY)

        assert isinstance(result, quake.Found)
        assert result.record == quake.EarthquakeRecord(
            title="M 7.1 - offshore", time_ms=1393290141440, tsunami=1
        )

    def test_only_first_feature_used(self):
        body = (
            '{"features":['
            '{"properties":{"title":"first","time":1,"tsunami":0}},'
            '{"properties":{"title":"second","time":2,"tsunami":1}}]}'
        )

        result = usgs.extract_feature(body)

        assert isinstance(result, quake.Found)
        assert result.record.title == "first"

    def test_large_timestamp_preserved(self):
        time_ms = 9007199254740993
        body = (
            '{"features":[{"properties":{"title":"t","time":%d,"tsunami":0}}]}'
            % time_ms
        )

        result = usgs.extract_feature(body)

        assert result.record.time_ms == time_ms
        assert isinstance(result.record.time_ms, int)

    def test_extra_properties_ignored(self):
        body = (
            '{"type":"FeatureCollection","features":[{"type":"Feature",'
            '"properties":{"mag":7.1,"place":"offshore","title":"M 7.1",'
            '"time":5,"tsunami":0,"url":"https://example.com"},'
            '"geometry":{"type":"Point","coordinates":[1,2,3]}}]}'
        )

        result = usgs.extract_feature(body)

        assert result == quake.Found(
            record=quake.EarthquakeRecord(title="M 7.1", time_ms=5, tsunami=0)
        )

    @pytest.mark.parametrize("text", ["", " ", "\n\t  \n"])
    def test_blank_is_not_available(self, text):
        result = usgs.extract_feature(text)

        assert isinstance(result, quake.NotAvailable)
        assert result.record == quake.PLACEHOLDER

    @pytest.mark.parametrize(
        "text",
        [
            '{"features":[]}',
            "{}",
            '{"features":null}',
            '{"features":{}}',
            "[]",
            "not json",
            '{"features":[',
            '{"features":[42]}',
            '{"features":[{}]}',
            '{"features":[{"properties":null}]}',
        ],
    )
    def test_bad_shape_is_not_available(self, text):
        result = usgs.extract_feature(text)

        assert isinstance(result, quake.NotAvailable)
        assert result.record == quake.PLACEHOLDER

    @pytest.mark.parametrize(
        "properties",
        [
            '{"time":1,"tsunami":0}',
            '{"title":"t","tsunami":0}',
            '{"title":"t","time":1}',
            '{"title":null,"time":1,"tsunami":0}',
            '{"title":"t","time":"1","tsunami":0}',
            '{"title":"t","time":1.5,"tsunami":0}',
            '{"title":"t","time":1,"tsunami":"yes"}',
            '{"title":"t","time":1,"tsunami":true}',
            '{"title":"t","time":true,"tsunami":0}',
            '{"title":"t","time":false,"tsunami":false}',
        ],
    )
    def test_missing_or_mistyped_field_is_not_available(self, properties):
        result = usgs.extract_feature('{"features":[{"properties":%s}]}' % properties)

        assert isinstance(result, quake.NotAvailable)
        assert result.record == quake.PLACEHOLDER

    def test_placeholder_values(self):
        record = usgs.extract_feature("").record

        assert record.title == ""
        assert record.time_ms == 0
        assert record.tsunami not in (0, 1)


class TestBuildQueryUrl:
    def test_query(self):
        url = usgs.build_query_url(
            starttime="2014-01-01", endtime="2014-12-01", minmagnitude=7
        )

        assert url == (
            "https://earthquake.usgs.gov/fdsnws/event/1/query"
            "?format=geojson&starttime=2014-01-01&endtime=2014-12-01&minmagnitude=7"
        )

    def test_no_magnitude(self):
        url = usgs.build_query_url(starttime="2014-01-01", endtime="2014-01-02")

        assert "minmagnitude" not in url


class TestFetcher:
    """Unit tests for the fetcher wrapper around http.request"""

    @pytest.mark.parametrize(
        "url",
        [
            "not a url",
            "http://earthquake.usgs.gov:abc/fdsnws",
            "http://earthquake usgs.gov/fdsnws",
        ],
    )
    def test_invalid_url_never_requests(self, url):
        fetcher = usgs.Fetcher(url=url)

        with mock.patch("soonami.http.request") as request:
            body = fetcher.fetch()

        assert fetcher.url is None
        assert body == ""
        request.assert_not_called()

    def test_valid_url_passes_timeouts(self):
        fetcher = usgs.Fetcher(url=usgs.DEFAULT_URL, connect_timeout=1.5, read_timeout=2.5)

        with mock.patch(
            "soonami.http.request", return_value=http.Response(status=200, body="{}")
        ) as request:
            body = fetcher.fetch()

        assert body == "{}"
        request.assert_called_once_with(
            url=usgs.DEFAULT_URL, method="GET", connect_timeout=1.5, read_timeout=2.5
        )

    def test_default_timeouts(self):
        fetcher = usgs.Fetcher()

        assert fetcher.connect_timeout == 15.0
        assert fetcher.read_timeout == 10.0

    def test_fetch_error_propagates(self):
        fetcher = usgs.Fetcher()

        with mock.patch("soonami.http.request", side_effect=http.FetchError("boom")):
            with pytest.raises(http.FetchError):
                _ = usgs.get_quake_data(fetcher=fetcher)
