"""
Tests for defaults.py and asgs.py modules.

Tests:
- ForcingKind parsing
- load_defaults validation
- check_required, derive_instance_name
- build_config_payload overlay
- submit_config
"""

import json
import os
import sys
import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from adcirclive.asgs import (
    build_config_payload,
    check_required,
    derive_instance_name,
    submit_config,
)
from adcirclive.defaults import FLAG_FIELDS, AsgsConfig, ForcingKind, load_defaults
from adcirclive.errors import (
    ConfigurationError,
    MissingOptionsError,
    RemoteError,
    UnknownForcingKindError,
)
from adcirclive.transport import Transport

from conftest import TEST_BASE_URL, make_http_response, make_session


MINIMAL_ATCF = {
    "operator": "alice",
    "asgsadmin": "alice@example.com",
    "met_kind": "ATCF",
    "gridname": "NCSC_SAB_v1.23",
    "ncpu": "16",
}


@pytest.fixture(scope="module")
def defaults():
    return load_defaults()


# =============================================================================
# Test ForcingKind and load_defaults
# =============================================================================

class TestForcingKind:
    """Tests for ForcingKind enum."""

    @pytest.mark.parametrize("raw", ["NAM", "nam", " Nam "])
    def test_parse_case_insensitive(self, raw):
        assert ForcingKind.parse(raw) is ForcingKind.NAM

    def test_parse_unknown(self):
        with pytest.raises(UnknownForcingKindError) as excinfo:
            ForcingKind.parse("HWRF")
        assert "HWRF" in str(excinfo.value)
        assert "ATCF" in excinfo.value.known


class TestLoadDefaults:
    """Tests for the bundled defaults document."""

    def test_every_kind_has_a_record(self, defaults):
        assert set(defaults) == set(ForcingKind)
        assert all(isinstance(record, AsgsConfig) for record in defaults.values())

    def test_kinds_differ(self, defaults):
        assert defaults[ForcingKind.ATCF].TROPICALCYCLONE == "on"
        assert defaults[ForcingKind.NAM].BACKGROUNDMET == "on"

    def test_flag_fields_exist_on_record(self):
        for field_name in FLAG_FIELDS.values():
            assert field_name in AsgsConfig.model_fields

    def test_unknown_field_rejected(self, temp_dir):
        path = os.path.join(temp_dir, "defaults.json")
        records = {kind.value: {} for kind in ForcingKind}
        records["NAM"] = {"NOT_A_FIELD": "x"}
        with open(path, "w") as f:
            json.dump(records, f)

        with pytest.raises(ConfigurationError):
            load_defaults(path)

    def test_missing_kind_rejected(self, temp_dir):
        path = os.path.join(temp_dir, "defaults.json")
        with open(path, "w") as f:
            json.dump({"NAM": {}}, f)

        with pytest.raises(ConfigurationError) as excinfo:
            load_defaults(path)
        assert "ATCF" in str(excinfo.value)

    def test_unreadable_file(self, temp_dir):
        with pytest.raises(ConfigurationError):
            load_defaults(os.path.join(temp_dir, "missing.json"))


# =============================================================================
# Test validation and instance names
# =============================================================================

class TestCheckRequired:
    """Tests for check_required function."""

    def test_complete_options_pass(self):
        check_required(MINIMAL_ATCF)

    def test_reports_missing_gridname(self):
        options = dict(MINIMAL_ATCF, gridname=None)
        with pytest.raises(MissingOptionsError) as excinfo:
            check_required(options)
        assert excinfo.value.missing == ["--gridname"]
        assert "--gridname" in str(excinfo.value)

    def test_reports_every_missing_option(self):
        with pytest.raises(MissingOptionsError) as excinfo:
            check_required({"met_kind": "NAM"})
        assert excinfo.value.missing == ["--operator", "--asgsadmin", "--gridname", "--ncpu"]

    def test_empty_string_counts_as_missing(self):
        with pytest.raises(MissingOptionsError):
            check_required(dict(MINIMAL_ATCF, ncpu=""))


class TestDeriveInstanceName:
    """Tests for derive_instance_name function."""

    def test_machine_falls_back_to_linux(self):
        options = {"gridname": "HSOFS", "met_kind": "NAM", "machine": None, "operator": "alice"}
        assert derive_instance_name(options) == "HSOFS_NAM_Linux_alice"

    def test_all_fallbacks(self):
        assert derive_instance_name({}) == "HSOFS_NAM_Linux_ukwn"

    def test_uses_supplied_values(self):
        options = {"gridname": "EGOMv20b", "met_kind": "atcf", "machine": "frontera", "operator": "bob"}
        assert derive_instance_name(options) == "EGOMv20b_ATCF_frontera_bob"


# =============================================================================
# Test build_config_payload
# =============================================================================

class TestBuildConfigPayload:
    """Tests for build_config_payload function."""

    def test_overlays_supplied_fields(self, defaults):
        payload = build_config_payload(MINIMAL_ATCF, defaults)

        assert payload.GRIDNAME == "NCSC_SAB_v1.23"
        assert payload.NCPU == "16"
        assert payload.OPERATOR == "alice"
        assert payload.ASGSADMIN == "alice@example.com"

    def test_other_fields_keep_atcf_defaults(self, defaults):
        payload = build_config_payload(MINIMAL_ATCF, defaults).model_dump()
        template = defaults[ForcingKind.ATCF].model_dump()
        overlaid = {"GRIDNAME", "NCPU", "OPERATOR", "ASGSADMIN", "INSTANCENAME"}

        for name, value in template.items():
            if name not in overlaid:
                assert payload[name] == value, name

    def test_derives_instance_name(self, defaults):
        payload = build_config_payload(MINIMAL_ATCF, defaults)
        assert payload.INSTANCENAME == "NCSC_SAB_v1.23_ATCF_Linux_alice"

    def test_explicit_instance_name_kept(self, defaults):
        options = dict(MINIMAL_ATCF, instancename="my-instance")
        assert build_config_payload(options, defaults).INSTANCENAME == "my-instance"

    def test_machine_overlaid_and_used_in_name(self, defaults):
        options = dict(MINIMAL_ATCF, machine="hatteras")
        payload = build_config_payload(options, defaults)
        assert payload.MACHINE == "hatteras"
        assert payload.INSTANCENAME == "NCSC_SAB_v1.23_ATCF_hatteras_alice"

    def test_lowercase_met_kind_selects_template(self, defaults):
        options = dict(MINIMAL_ATCF, met_kind="atcf")
        assert build_config_payload(options, defaults).TROPICALCYCLONE == "on"

    def test_unknown_met_kind(self, defaults):
        with pytest.raises(UnknownForcingKindError):
            build_config_payload(dict(MINIMAL_ATCF, met_kind="HWRF"), defaults)

    def test_template_not_mutated(self, defaults):
        before = defaults[ForcingKind.ATCF].model_dump()
        build_config_payload(MINIMAL_ATCF, defaults)
        assert defaults[ForcingKind.ATCF].model_dump() == before


class TestSubmitConfig:
    """Tests for submit_config function."""

    def test_posts_record(self, fixed_signer, defaults):
        session = make_session(make_http_response(200, {"content": "INSTANCENAME=x"}))
        transport = Transport(fixed_signer, base_url=TEST_BASE_URL, session=session)
        payload = build_config_payload(MINIMAL_ATCF, defaults)

        response = submit_config(transport, payload)

        method, url = session.request.call_args.args
        assert method == "POST"
        assert url == f"{TEST_BASE_URL}/spa/models/ASGS/api/file/config"
        assert json.loads(session.request.call_args.kwargs["data"]) == payload.model_dump()
        assert response.content == "INSTANCENAME=x"

    def test_failure_raises(self, fixed_signer, defaults):
        session = make_session(make_http_response(401, {"error": "bad signature"}))
        transport = Transport(fixed_signer, base_url=TEST_BASE_URL, session=session)

        with pytest.raises(RemoteError):
            submit_config(transport, build_config_payload(MINIMAL_ATCF, defaults))


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
