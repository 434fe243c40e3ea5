"""
Client for the KBaseFeatureValues service.

The service stores numeric values associated with genome features and
conditions as a 2D matrix of floating point numbers (expression data, single
gene knockout fitness data) and offers clustering of features plus a few
related tools. All computation runs server-side; this module only marshals
typed calls.
"""
from __future__ import annotations
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Type, TypeVar, Union

import httpx
from pydantic import ValidationError

from .auth import AuthClient, AuthToken
from .config import Settings
from .envelope import RpcContext
from .errors import ConfigurationError, ProtocolViolationError
from .jsonrpc_client import JsonClientCaller
from .models import (
    BuildFeatureSetParams,
    ClusterHierarchicalParams,
    ClusterKMeansParams,
    ClustersFromDendrogramParams,
    ClustersToFileOutput,
    ClustersToFileParams,
    CorrectMatrixParams,
    EstimateKParams,
    EstimateKParamsNew,
    EstimateKResult,
    EvaluateClustersetQualityParams,
    ExportClustersSifOutput,
    ExportClustersSifParams,
    ExportClustersTsvOutput,
    ExportClustersTsvParams,
    ExportMatrixOutput,
    ExportMatrixParams,
    GetMatrixDescriptorParams,
    GetMatrixItemDescriptorsParams,
    GetMatrixItemsStatParams,
    GetMatrixSetsStatParams,
    GetMatrixStatParams,
    GetSubmatrixStatParams,
    ItemDescriptor,
    ItemSetStat,
    ItemStat,
    MatrixDescriptor,
    MatrixStat,
    MatrixToTsvFileOutput,
    MatrixToTsvFileParams,
    ReconnectMatrixToGenomeParams,
    StatusInfo,
    Struct,
    SubmatrixStat,
    TsvFileToMatrixOutput,
    TsvFileToMatrixParams,
    ValidateMatrixParams,
)


SERVICE_NAME = "KBaseFeatureValues"

P = TypeVar("P", bound=Struct)
Context = Optional[Sequence[RpcContext]]


def _coerce(params: Union[P, Dict[str, Any]], model: Type[P], name: str) -> P:
    if isinstance(params, model):
        return params
    try:
        return model.model_validate(params)
    except ValidationError as e:
        raise ConfigurationError(f"{SERVICE_NAME}.{name}: invalid {model.__name__}: {e}") from e


class FeatureValuesClient:
    """Typed facade: one method per remote operation of the service."""

    service_name = SERVICE_NAME

    def __init__(
        self,
        url: str,
        token: Union[AuthToken, str, None] = None,
        *,
        user_id: Optional[str] = None,
        password: Optional[str] = None,
        auth_url: Optional[str] = None,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.BaseTransport] = None,
        auth_client: Optional[AuthClient] = None,
    ) -> None:
        self._caller = JsonClientCaller(
            url,
            token,
            user_id=user_id,
            password=password,
            auth_url=auth_url,
            settings=settings,
            transport=transport,
            auth_client=auth_client,
        )

    # ---------- configuration, delegated to the caller ----------

    @property
    def caller(self) -> JsonClientCaller:
        return self._caller

    @property
    def url(self) -> str:
        return self._caller.url

    @property
    def token(self) -> Optional[AuthToken]:
        return self._caller.token

    def set_connection_read_timeout(self, seconds: Optional[float]) -> None:
        self._caller.set_connection_read_timeout(seconds)

    def is_insecure_http_connection_allowed(self) -> bool:
        return self._caller.is_insecure_http_connection_allowed()

    def set_insecure_http_connection_allowed(self, allowed: bool) -> None:
        self._caller.set_insecure_http_connection_allowed(allowed)

    def is_auth_allowed_for_http(self) -> bool:
        return self._caller.is_auth_allowed_for_http()

    def set_auth_allowed_for_http(self, allowed: bool) -> None:
        self._caller.set_auth_allowed_for_http(allowed)

    def is_all_ssl_certificates_trusted(self) -> bool:
        return self._caller.is_all_ssl_certificates_trusted()

    def set_all_ssl_certificates_trusted(self, trust_all: bool) -> None:
        self._caller.set_all_ssl_certificates_trusted(trust_all)

    def is_streaming_mode_on(self) -> bool:
        return self._caller.is_streaming_mode_on()

    def set_streaming_mode_on(self, streaming: bool) -> None:
        self._caller.set_streaming_mode_on(streaming)

    def set_file_for_next_rpc_response(self, path: Union[str, Path, None]) -> None:
        self._caller.set_file_for_next_rpc_response(path)

    @property
    def service_version(self) -> Optional[str]:
        return self._caller.service_version

    @service_version.setter
    def service_version(self, value: Optional[str]) -> None:
        self._caller.service_version = value

    def close(self) -> None:
        self._caller.close()

    def __enter__(self) -> "FeatureValuesClient":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    # ---------- plumbing ----------

    def _call_single(
        self,
        name: str,
        args: List[Any],
        result_type: Any,
        context: Context,
        auth_required: bool = True,
    ) -> Any:
        method = f"{self.service_name}.{name}"
        res = self._caller.call(
            method,
            args,
            result_type,
            has_result=True,
            auth_required=auth_required,
            context=context,
        )
        if len(res) != 1:
            raise ProtocolViolationError(method, len(res))
        return res[0]

    def _call_void(self, name: str, args: List[Any], context: Context, auth_required: bool = True) -> None:
        self._caller.call(
            f"{self.service_name}.{name}",
            args,
            has_result=False,
            auth_required=auth_required,
            context=context,
        )

    # ---------- clustering ----------

    def estimate_k(self, params: Union[EstimateKParams, Dict[str, Any]], context: Context = None) -> EstimateKResult:
        """
        Estimate K for K-means clustering.

        Used as an analysis step before clustering: a range of K values is
        tried and scored, and the best K is reported along with the scores.
        """
        return self._call_single("estimate_k", [_coerce(params, EstimateKParams, "estimate_k")], EstimateKResult, context)

    def estimate_k_new(self, params: Union[EstimateKParamsNew, Dict[str, Any]], context: Context = None) -> EstimateKResult:
        """Estimate K with a selectable criterion (silhouette, gap statistic...)."""
        return self._call_single("estimate_k_new", [_coerce(params, EstimateKParamsNew, "estimate_k_new")], EstimateKResult, context)

    def cluster_k_means(self, params: Union[ClusterKMeansParams, Dict[str, Any]], context: Context = None) -> str:
        """Cluster features by K-means. Returns the workspace reference of the cluster set."""
        return self._call_single("cluster_k_means", [_coerce(params, ClusterKMeansParams, "cluster_k_means")], str, context)

    def cluster_hierarchical(
        self, params: Union[ClusterHierarchicalParams, Dict[str, Any]], context: Context = None
    ) -> str:
        """Cluster features by hierarchical clustering. Returns a workspace reference."""
        return self._call_single("cluster_hierarchical", [_coerce(params, ClusterHierarchicalParams, "cluster_hierarchical")], str, context)

    def clusters_from_dendrogram(
        self, params: Union[ClustersFromDendrogramParams, Dict[str, Any]], context: Context = None
    ) -> str:
        """
        Cut the dendrogram of a hierarchical clustering into new clusters,
        at a given height or by another approach.
        """
        return self._call_single(
            "clusters_from_dendrogram", [_coerce(params, ClustersFromDendrogramParams, "clusters_from_dendrogram")], str, context
        )

    def evaluate_clusterset_quality(
        self, params: Union[EvaluateClustersetQualityParams, Dict[str, Any]], context: Context = None
    ) -> None:
        self._call_void("evaluate_clusterset_quality", [_coerce(params, EvaluateClustersetQualityParams, "evaluate_clusterset_quality")], context)

    # ---------- matrix maintenance ----------

    def validate_matrix(self, params: Union[ValidateMatrixParams, Dict[str, Any]], context: Context = None) -> None:
        # the server accepts anonymous validation requests
        self._call_void("validate_matrix", [_coerce(params, ValidateMatrixParams, "validate_matrix")], context, auth_required=False)

    def correct_matrix(self, params: Union[CorrectMatrixParams, Dict[str, Any]], context: Context = None) -> str:
        return self._call_single("correct_matrix", [_coerce(params, CorrectMatrixParams, "correct_matrix")], str, context)

    def reconnect_matrix_to_genome(
        self, params: Union[ReconnectMatrixToGenomeParams, Dict[str, Any]], context: Context = None
    ) -> str:
        return self._call_single(
            "reconnect_matrix_to_genome", [_coerce(params, ReconnectMatrixToGenomeParams, "reconnect_matrix_to_genome")], str, context
        )

    def build_feature_set(self, params: Union[BuildFeatureSetParams, Dict[str, Any]], context: Context = None) -> str:
        return self._call_single("build_feature_set", [_coerce(params, BuildFeatureSetParams, "build_feature_set")], str, context)

    # ---------- descriptors and statistics ----------

    def get_matrix_descriptor(
        self, params: Union[GetMatrixDescriptorParams, Dict[str, Any]], context: Context = None
    ) -> MatrixDescriptor:
        return self._call_single(
            "get_matrix_descriptor", [_coerce(params, GetMatrixDescriptorParams, "get_matrix_descriptor")], MatrixDescriptor, context
        )

    def get_matrix_row_descriptors(
        self, params: Union[GetMatrixItemDescriptorsParams, Dict[str, Any]], context: Context = None
    ) -> List[ItemDescriptor]:
        return self._call_single(
            "get_matrix_row_descriptors",
            [_coerce(params, GetMatrixItemDescriptorsParams, "get_matrix_row_descriptors")],
            List[ItemDescriptor],
            context,
        )

    def get_matrix_column_descriptors(
        self, params: Union[GetMatrixItemDescriptorsParams, Dict[str, Any]], context: Context = None
    ) -> List[ItemDescriptor]:
        return self._call_single(
            "get_matrix_column_descriptors",
            [_coerce(params, GetMatrixItemDescriptorsParams, "get_matrix_column_descriptors")],
            List[ItemDescriptor],
            context,
        )

    def get_matrix_rows_stat(
        self, params: Union[GetMatrixItemsStatParams, Dict[str, Any]], context: Context = None
    ) -> List[ItemStat]:
        return self._call_single(
            "get_matrix_rows_stat", [_coerce(params, GetMatrixItemsStatParams, "get_matrix_rows_stat")], List[ItemStat], context
        )

    def get_matrix_columns_stat(
        self, params: Union[GetMatrixItemsStatParams, Dict[str, Any]], context: Context = None
    ) -> List[ItemStat]:
        return self._call_single(
            "get_matrix_columns_stat", [_coerce(params, GetMatrixItemsStatParams, "get_matrix_columns_stat")], List[ItemStat], context
        )

    def get_matrix_row_sets_stat(
        self, params: Union[GetMatrixSetsStatParams, Dict[str, Any]], context: Context = None
    ) -> List[ItemSetStat]:
        return self._call_single(
            "get_matrix_row_sets_stat", [_coerce(params, GetMatrixSetsStatParams, "get_matrix_row_sets_stat")], List[ItemSetStat], context
        )

    def get_matrix_column_sets_stat(
        self, params: Union[GetMatrixSetsStatParams, Dict[str, Any]], context: Context = None
    ) -> List[ItemSetStat]:
        return self._call_single(
            "get_matrix_column_sets_stat", [_coerce(params, GetMatrixSetsStatParams, "get_matrix_column_sets_stat")], List[ItemSetStat], context
        )

    def get_matrix_stat(
        self, params: Union[GetMatrixStatParams, Dict[str, Any]], context: Context = None
    ) -> MatrixStat:
        return self._call_single("get_matrix_stat", [_coerce(params, GetMatrixStatParams, "get_matrix_stat")], MatrixStat, context)

    def get_submatrix_stat(
        self, params: Union[GetSubmatrixStatParams, Dict[str, Any]], context: Context = None
    ) -> SubmatrixStat:
        return self._call_single(
            "get_submatrix_stat", [_coerce(params, GetSubmatrixStatParams, "get_submatrix_stat")], SubmatrixStat, context
        )

    # ---------- import / export ----------

    def tsv_file_to_matrix(
        self, params: Union[TsvFileToMatrixParams, Dict[str, Any]], context: Context = None
    ) -> TsvFileToMatrixOutput:
        return self._call_single(
            "tsv_file_to_matrix", [_coerce(params, TsvFileToMatrixParams, "tsv_file_to_matrix")], TsvFileToMatrixOutput, context
        )

    def matrix_to_tsv_file(
        self, params: Union[MatrixToTsvFileParams, Dict[str, Any]], context: Context = None
    ) -> MatrixToTsvFileOutput:
        return self._call_single(
            "matrix_to_tsv_file", [_coerce(params, MatrixToTsvFileParams, "matrix_to_tsv_file")], MatrixToTsvFileOutput, context
        )

    def export_matrix(
        self, params: Union[ExportMatrixParams, Dict[str, Any]], context: Context = None
    ) -> ExportMatrixOutput:
        return self._call_single("export_matrix", [_coerce(params, ExportMatrixParams, "export_matrix")], ExportMatrixOutput, context)

    def clusters_to_file(
        self, params: Union[ClustersToFileParams, Dict[str, Any]], context: Context = None
    ) -> ClustersToFileOutput:
        return self._call_single(
            "clusters_to_file", [_coerce(params, ClustersToFileParams, "clusters_to_file")], ClustersToFileOutput, context
        )

    def export_clusters_tsv(
        self, params: Union[ExportClustersTsvParams, Dict[str, Any]], context: Context = None
    ) -> ExportClustersTsvOutput:
        return self._call_single(
            "export_clusters_tsv", [_coerce(params, ExportClustersTsvParams, "export_clusters_tsv")], ExportClustersTsvOutput, context
        )

    def export_clusters_sif(
        self, params: Union[ExportClustersSifParams, Dict[str, Any]], context: Context = None
    ) -> ExportClustersSifOutput:
        return self._call_single(
            "export_clusters_sif", [_coerce(params, ExportClustersSifParams, "export_clusters_sif")], ExportClustersSifOutput, context
        )

    # ---------- service ----------

    def status(self, context: Context = None) -> StatusInfo:
        """Server build and version information. No credential needed."""
        return self._call_single("status", [], Dict[str, Any], context, auth_required=False)
