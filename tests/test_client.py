"""
Tests for the typed KBaseFeatureValues facade
"""
import pytest

from feature_values import FeatureValuesClient, RpcContext
from feature_values.auth import AuthToken
from feature_values.errors import ConfigurationError, ProtocolViolationError, UnauthorizedError, JsonRpcError
from feature_values.models import (
    ClusterKMeansParams,
    EstimateKParams,
    EstimateKResult,
    ExpressionMatrix,
    FloatMatrix2D,
    GetMatrixItemDescriptorsParams,
    ItemDescriptor,
    ItemSetStat,
    MatrixDescriptor,
    SubmatrixStat,
)


URL = "https://kbase.example.org/services/feature_values"
TOKEN = AuthToken(token="tok-123456789")


@pytest.fixture
def client(server):
    return FeatureValuesClient(URL, TOKEN, transport=server.transport)


class TestSingleValuedCalls:
    """Single-element result arrays are unwrapped"""

    def test_get_matrix_descriptor(self, server, client):
        server.reply({"result": [{"matrix_id": "m1", "rows_count": 10, "columns_count": 3}]})
        res = client.get_matrix_descriptor({"input_data": "ws/expr"})
        assert isinstance(res, MatrixDescriptor)
        assert res.matrix_id == "m1"
        assert res.rows_count == 10
        assert server.last_payload == {
            "method": "KBaseFeatureValues.get_matrix_descriptor",
            "params": [{"input_data": "ws/expr"}],
        }

    def test_cluster_k_means_returns_ref(self, server, client):
        server.reply({"result": ["12/3/1"]})
        ref = client.cluster_k_means(ClusterKMeansParams(k=3, input_data="ws/expr", out_workspace="ws"))
        assert ref == "12/3/1"
        assert server.last_payload["params"] == [{"k": 3, "input_data": "ws/expr", "out_workspace": "ws"}]

    def test_estimate_k(self, server, client):
        server.reply({"result": [{"best_k": 4, "estimate_cluster_sizes": [[2, 0.1], [4, 0.7]]}]})
        res = client.estimate_k(EstimateKParams(input_matrix="ws/expr", min_k=2, max_k=4))
        assert res.best_k == 4
        assert res.estimate_cluster_sizes == [(2, 0.1), (4, 0.7)]

    def test_get_submatrix_stat_nested(self, server, client):
        server.reply({"result": [{
            "mtx_descriptor": {"matrix_id": "m"},
            "row_set_stats": {"size": 2, "avgs": [1.0, 2.0]},
            "values": [[1.0, None]],
        }]})
        res = client.get_submatrix_stat({"input_data": "ws/expr", "fl_values": 1})
        assert isinstance(res, SubmatrixStat)
        assert isinstance(res.row_set_stats, ItemSetStat)
        assert res.values == [[1.0, None]]

    def test_status(self, server, client):
        server.reply({"result": [{"state": "OK", "version": "1.0.0", "git_commit_hash": "abc"}]})
        assert client.status() == {"state": "OK", "version": "1.0.0", "git_commit_hash": "abc"}
        assert server.last_payload == {"method": "KBaseFeatureValues.status", "params": []}

    def test_status_is_anonymous(self, server):
        server.reply({"result": [{"state": "OK"}]})
        anon = FeatureValuesClient("http://example.org/svc", transport=server.transport)
        assert anon.status() == {"state": "OK"}
        assert "authorization" not in server.requests[0].headers


class TestListValuedCalls:
    """List results keep the inner list after the outer wrapper is removed"""

    def test_row_descriptors(self, server, client):
        server.reply({"result": [[{"id": "a"}, {"id": "b"}]]})
        res = client.get_matrix_row_descriptors(GetMatrixItemDescriptorsParams(input_data="ws/expr"))
        assert [d.id for d in res] == ["a", "b"]
        assert all(isinstance(d, ItemDescriptor) for d in res)

    def test_column_descriptors_empty(self, server, client):
        server.reply({"result": [[]]})
        assert client.get_matrix_column_descriptors({"input_data": "ws/expr"}) == []

    def test_rows_stat(self, server, client):
        server.reply({"result": [[{"index_for": 0, "avg": 1.5}]]})
        res = client.get_matrix_rows_stat({"input_data": "ws/expr", "fl_avgs": 1})
        assert res[0].avg == 1.5


class TestVoidCalls:
    def test_evaluate_clusterset_quality(self, server, client):
        server.reply({"result": []})
        assert client.evaluate_clusterset_quality({"input_clusterset": "ws/c"}) is None
        assert server.last_payload["method"] == "KBaseFeatureValues.evaluate_clusterset_quality"

    def test_validate_matrix_without_credential(self, server):
        server.reply({"result": []})
        anon = FeatureValuesClient(URL, transport=server.transport)
        assert anon.validate_matrix({"method": "KBaseFeatureValues.ExpressionMatrix", "input_data": "ws/e"}) is None
        assert len(server.requests) == 1


class TestContract:
    """Protocol conventions and error pass-through"""

    def test_too_many_elements(self, server, client):
        server.reply({"result": ["a", "b"]})
        with pytest.raises(ProtocolViolationError) as ei:
            client.correct_matrix({"input_data": "ws/e"})
        assert ei.value.length == 2
        assert ei.value.method == "KBaseFeatureValues.correct_matrix"

    def test_no_elements(self, server, client):
        server.reply({"result": []})
        with pytest.raises(ProtocolViolationError):
            client.export_matrix({"input_ref": "ws/e"})

    def test_auth_required_operation_without_credential(self, server):
        anon = FeatureValuesClient(URL, transport=server.transport)
        with pytest.raises(UnauthorizedError):
            anon.cluster_hierarchical({"input_data": "ws/e"})
        assert server.requests == []

    def test_remote_error_passes_through(self, server, client):
        server.reply({"error": {"code": -32500, "message": "No such object"}}, status_code=500)
        with pytest.raises(JsonRpcError) as ei:
            client.build_feature_set({"genome": "ws/g"})
        assert ei.value.message == "No such object"

    def test_service_version_pin(self, server, client):
        server.reply({"result": [{"shock_id": "s1"}]}).reply({"result": [{"shock_id": "s2"}]})
        client.service_version = "dev"
        client.export_clusters_tsv({"input_ref": "ws/c"})
        assert server.last_payload["method"] == "KBaseFeatureValues.export_clusters_tsv:dev"
        client.service_version = None
        res = client.export_clusters_sif({"input_ref": "ws/c"})
        assert server.last_payload["method"] == "KBaseFeatureValues.export_clusters_sif"
        assert res.shock_id == "s2"

    def test_context_forwarded(self, server, client):
        server.reply({"result": [{"file_path": "/tmp/x.tsv"}]})
        client.matrix_to_tsv_file({"input_ref": "ws/e"}, context=[RpcContext(run_id="r1")])
        assert server.last_payload["context"] == [{"run_id": "r1"}]

    def test_configuration_delegates(self, client):
        client.set_streaming_mode_on(True)
        client.set_all_ssl_certificates_trusted(True)
        client.set_insecure_http_connection_allowed(True)
        assert client.is_streaming_mode_on()
        assert client.is_all_ssl_certificates_trusted()
        assert client.is_insecure_http_connection_allowed()
        assert client.caller.settings.streaming_mode is True
        assert client.token == TOKEN
        assert client.url == URL

    def test_auth_allowed_for_http_delegates(self, client):
        client.set_auth_allowed_for_http(True)
        assert client.is_auth_allowed_for_http()
        assert client.caller.settings.insecure_http_allowed is True

    def test_invalid_parameters(self, server, client):
        with pytest.raises(ConfigurationError) as ei:
            client.cluster_k_means({"k": "three", "input_data": "ws/expr"})
        assert "KBaseFeatureValues.cluster_k_means" in str(ei.value)
        assert server.requests == []

    def test_unencodable_parameters(self, server, client):
        with pytest.raises(ConfigurationError):
            client.build_feature_set({"genome": "ws/g", "extra": object()})
        assert server.requests == []


class TestModels:
    """Typed structures keep their values through serialization"""

    def test_expression_matrix_round_trip(self):
        matrix = ExpressionMatrix(
            type="log-ratio",
            scale="2.0",
            genome_ref="1/2/3",
            data=FloatMatrix2D(row_ids=["g1", "g2"], col_ids=["c1"], values=[[0.5], [None]]),
        )
        dumped = matrix.model_dump(mode="json", exclude_none=True)
        assert ExpressionMatrix.model_validate(dumped) == matrix

    def test_unknown_fields_survive(self):
        res = EstimateKResult.model_validate({"best_k": 2, "new_server_field": [1, 2]})
        assert res.model_dump(exclude_none=True) == {"best_k": 2, "new_server_field": [1, 2]}

    def test_tsv_file_to_matrix_output(self, server, client):
        server.reply({"result": [{"output_matrix_ref": "1/5/1"}]})
        out = client.tsv_file_to_matrix({"input_file_path": "/data/expr.tsv", "output_ws_name": "ws"})
        assert out.output_matrix_ref == "1/5/1"
