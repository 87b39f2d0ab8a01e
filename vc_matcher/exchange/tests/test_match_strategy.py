from unittest import TestCase, mock

from ...holder.wallet_credential import WalletCredential
from .. import match_strategy as test_module
from ..error import PresentationDefinitionError
from ..match_strategy import (
    BasePresentationDefinitionMatchStrategy,
    FilterPresentationDefinitionMatchStrategy,
)
from ..pres_exch import PresentationDefinition
from .test_data import (
    BACHELOR_DEGREE_PD,
    DEGREE_PD,
    EMPLOYMENT_OR_DEGREE_PD,
    UNIVERSITY_DEGREE,
    get_test_credentials,
)


class TestFilterPresentationDefinitionMatchStrategy(TestCase):
    def setUp(self):
        self.strategy = FilterPresentationDefinitionMatchStrategy()
        self.credentials = get_test_credentials()

    def test_abstract(self):
        with self.assertRaises(TypeError):
            BasePresentationDefinitionMatchStrategy()
        assert isinstance(self.strategy, BasePresentationDefinitionMatchStrategy)

    def test_match_single_descriptor(self):
        result = self.strategy.match(self.credentials, DEGREE_PD)
        assert [cred.record_id for cred in result] == ["degree"]
        assert result[0] is self.credentials[0]

    def test_match_model(self):
        result = self.strategy.match(
            self.credentials, PresentationDefinition.deserialize(BACHELOR_DEGREE_PD)
        )
        assert [cred.record_id for cred in result] == ["degree"]

    def test_match_preserves_order(self):
        result = self.strategy.match(self.credentials, EMPLOYMENT_OR_DEGREE_PD)
        assert [cred.record_id for cred in result] == ["degree", "employment"]
        result = self.strategy.match(
            list(reversed(self.credentials)), EMPLOYMENT_OR_DEGREE_PD
        )
        assert [cred.record_id for cred in result] == ["employment", "degree"]

    def test_match_jwt_vc_claim(self):
        pd = {
            "input_descriptors": [
                {"id": "employment", "schema": [{"uri": "EmploymentCredential"}]}
            ]
        }
        result = self.strategy.match(self.credentials, pd)
        assert [cred.record_id for cred in result] == ["employment"]

    def test_match_subset_and_idempotent(self):
        first = self.strategy.match(self.credentials, EMPLOYMENT_OR_DEGREE_PD)
        assert all(cred in self.credentials for cred in first)
        assert self.strategy.match(first, EMPLOYMENT_OR_DEGREE_PD) == first

    def test_no_filter_groups(self):
        pd = {"input_descriptors": [{"id": "anything"}]}
        assert self.strategy.match(self.credentials, pd) == []
        assert self.strategy.match(self.credentials, {"id": "empty"}) == []

    def test_no_credentials(self):
        assert self.strategy.match([], DEGREE_PD) == []

    def test_mappings(self):
        documents = [{"type": "EmploymentCredential"}, UNIVERSITY_DEGREE]
        assert self.strategy.match(documents, DEGREE_PD) == [UNIVERSITY_DEGREE]

    def test_unparseable_document(self):
        credentials = [
            WalletCredential(document="not a credential", record_id="broken"),
            WalletCredential(record_id="empty"),
            *self.credentials,
        ]
        result = self.strategy.match(credentials, DEGREE_PD)
        assert [cred.record_id for cred in result] == ["degree"]

    def test_malformed_definition(self):
        pd = {
            "input_descriptors": [
                {"id": "broken", "constraints": {"fields": [{"path": ["$.type"]}]}}
            ]
        }
        with self.assertRaises(PresentationDefinitionError):
            self.strategy.match(self.credentials, pd)

    def test_credential_error_absorbed(self):
        with mock.patch.object(
            test_module, "matches", mock.MagicMock(side_effect=[TypeError, True])
        ):
            with self.assertLogs(test_module.LOGGER.name, level="DEBUG") as logs:
                result = self.strategy.match(self.credentials[:2], DEGREE_PD)
        assert [cred.record_id for cred in result] == ["employment"]
        assert any("skipped" in line for line in logs.output)

    def test_unread_filters_tolerated(self):
        for untyped_filter in (
            {"type": ["integer", "null"]},
            {"const": None},
            {"enum": [None]},
            {"const": {"grade": "A"}},
        ):
            pd = {
                "input_descriptors": [
                    {
                        "id": "degree",
                        "constraints": {
                            "fields": [
                                {
                                    "path": ["$.type"],
                                    "filter": {"pattern": "UniversityDegreeCredential"},
                                },
                                {
                                    "path": ["$.credentialSubject.age"],
                                    "filter": untyped_filter,
                                },
                            ]
                        },
                    }
                ]
            }
            assert self.strategy.match([UNIVERSITY_DEGREE], pd) == [UNIVERSITY_DEGREE]

    def test_number_literal(self):
        credential = WalletCredential(document='{"type": "X", "version": 1.10}')
        pd = {
            "input_descriptors": [
                {
                    "id": "versioned",
                    "constraints": {
                        "fields": [
                            {"path": ["$.type"], "filter": {"pattern": "X"}},
                            {"path": ["$.type_version"], "filter": {"pattern": "1"}},
                        ]
                    },
                }
            ]
        }
        assert self.strategy.match([credential], pd) == []
        pd["input_descriptors"][0]["constraints"]["fields"][1] = {
            "path": ["$.version", "$.type"],
            "filter": {"pattern": "1.10"},
        }
        assert self.strategy.match([credential], pd) == [credential]
