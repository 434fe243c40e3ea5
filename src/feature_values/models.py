"""Typed structures of the KBaseFeatureValues service.

Every field is optional and unknown keys are kept, so structures survive a
round trip through a newer server unchanged.
"""
from __future__ import annotations
from typing import Any, Dict, List, Optional, Tuple
from pydantic import BaseModel, ConfigDict


class Struct(BaseModel):
    model_config = ConfigDict(extra="allow")


# ---------- data types ----------

class FloatMatrix2D(Struct):
    """Row/column labelled matrix; missing values are null."""

    row_ids: Optional[List[str]] = None
    col_ids: Optional[List[str]] = None
    values: Optional[List[List[Optional[float]]]] = None


class AnalysisReport(Struct):
    checkTypeDetected: Optional[str] = None
    checkUsed: Optional[str] = None
    checkDescriptions: Optional[List[str]] = None
    checkResults: Optional[List[int]] = None
    messages: Optional[List[str]] = None
    warnings: Optional[List[str]] = None
    errors: Optional[List[str]] = None


class ExpressionMatrix(Struct):
    """Feature-by-condition expression values, as produced by data ingestion."""

    description: Optional[str] = None
    type: Optional[str] = None
    scale: Optional[str] = None
    row_normalization: Optional[str] = None
    col_normalization: Optional[str] = None
    genome_ref: Optional[str] = None
    feature_mapping: Optional[Dict[str, str]] = None
    conditionset_ref: Optional[str] = None
    condition_mapping: Optional[Dict[str, str]] = None
    diff_expr_matrix_ref: Optional[str] = None
    data: Optional[FloatMatrix2D] = None
    report: Optional[AnalysisReport] = None


# ---------- clustering ----------

class EstimateKParams(Struct):
    input_matrix: Optional[str] = None
    min_k: Optional[int] = None
    max_k: Optional[int] = None
    max_iter: Optional[int] = None
    random_seed: Optional[int] = None
    neighb_size: Optional[int] = None
    max_items: Optional[int] = None
    out_workspace: Optional[str] = None
    out_estimate_result: Optional[str] = None


class EstimateKParamsNew(Struct):
    input_matrix: Optional[str] = None
    min_k: Optional[int] = None
    max_k: Optional[int] = None
    criterion: Optional[str] = None
    usepam: Optional[int] = None
    alpha: Optional[float] = None
    diss: Optional[int] = None
    random_seed: Optional[int] = None
    out_workspace: Optional[str] = None
    out_estimate_result: Optional[str] = None


class EstimateKResult(Struct):
    best_k: Optional[int] = None
    estimate_cluster_sizes: Optional[List[Tuple[int, float]]] = None


class ClusterKMeansParams(Struct):
    k: Optional[int] = None
    input_data: Optional[str] = None
    n_start: Optional[int] = None
    max_iter: Optional[int] = None
    random_seed: Optional[int] = None
    algorithm: Optional[str] = None
    out_workspace: Optional[str] = None
    out_clusterset_id: Optional[str] = None


class ClusterHierarchicalParams(Struct):
    distance_metric: Optional[str] = None
    linkage_criteria: Optional[str] = None
    feature_height_cutoff: Optional[float] = None
    condition_height_cutoff: Optional[float] = None
    max_items: Optional[int] = None
    input_data: Optional[str] = None
    algorithm: Optional[str] = None
    out_workspace: Optional[str] = None
    out_clusterset_id: Optional[str] = None


class ClustersFromDendrogramParams(Struct):
    feature_dendrogram: Optional[str] = None
    feature_height_cutoff: Optional[float] = None
    condition_dendrogram: Optional[str] = None
    condition_height_cutoff: Optional[float] = None
    input_data: Optional[str] = None
    out_workspace: Optional[str] = None
    out_clusterset_id: Optional[str] = None


class EvaluateClustersetQualityParams(Struct):
    input_clusterset: Optional[str] = None
    out_workspace: Optional[str] = None
    out_report_id: Optional[str] = None


# ---------- matrix maintenance ----------

class ValidateMatrixParams(Struct):
    method: Optional[str] = None
    input_data: Optional[str] = None


class CorrectMatrixParams(Struct):
    input_data: Optional[str] = None
    transform_type: Optional[str] = None
    transform_value: Optional[str] = None
    out_workspace: Optional[str] = None
    out_matrix_id: Optional[str] = None


class ReconnectMatrixToGenomeParams(Struct):
    input_data: Optional[str] = None
    genome_ref: Optional[str] = None
    out_workspace: Optional[str] = None
    out_matrix_id: Optional[str] = None


class BuildFeatureSetParams(Struct):
    genome: Optional[str] = None
    feature_ids: Optional[str] = None
    feature_ids_custom: Optional[str] = None
    base_feature_set: Optional[str] = None
    description: Optional[str] = None
    out_workspace: Optional[str] = None
    output_feature_set: Optional[str] = None


# ---------- descriptors and statistics ----------

class GetMatrixDescriptorParams(Struct):
    input_data: Optional[str] = None


class MatrixDescriptor(Struct):
    matrix_id: Optional[str] = None
    matrix_name: Optional[str] = None
    matrix_description: Optional[str] = None
    genome_id: Optional[str] = None
    genome_name: Optional[str] = None
    rows_count: Optional[int] = None
    columns_count: Optional[int] = None
    scale: Optional[str] = None
    type: Optional[str] = None
    row_normalization: Optional[str] = None
    col_normalization: Optional[str] = None


class GetMatrixItemDescriptorsParams(Struct):
    input_data: Optional[str] = None
    item_indeces_ordered: Optional[List[int]] = None
    item_ids: Optional[List[str]] = None
    requested_property_types: Optional[List[str]] = None


class ItemDescriptor(Struct):
    index: Optional[int] = None
    id: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    properties: Optional[Dict[str, str]] = None


class GetMatrixItemsStatParams(Struct):
    input_data: Optional[str] = None
    item_indeces_for: Optional[List[int]] = None
    item_indeces_on: Optional[List[int]] = None
    fl_indeces_on: Optional[int] = None
    fl_avgs: Optional[int] = None
    fl_mins: Optional[int] = None
    fl_maxs: Optional[int] = None
    fl_std_devs: Optional[int] = None
    fl_missing_values: Optional[int] = None


class ItemStat(Struct):
    index_for: Optional[int] = None
    indeces_on: Optional[List[int]] = None
    size: Optional[int] = None
    avg: Optional[float] = None
    min: Optional[float] = None
    max: Optional[float] = None
    std: Optional[float] = None
    missing_values: Optional[int] = None


class GetMatrixSetStatParams(Struct):
    item_indeces_for: Optional[List[int]] = None
    item_indeces_on: Optional[List[int]] = None
    fl_indeces_on: Optional[int] = None
    fl_indeces_for: Optional[int] = None
    fl_avgs: Optional[int] = None
    fl_mins: Optional[int] = None
    fl_maxs: Optional[int] = None
    fl_std_devs: Optional[int] = None
    fl_missing_values: Optional[int] = None


class GetMatrixSetsStatParams(Struct):
    input_data: Optional[str] = None
    params: Optional[List[GetMatrixSetStatParams]] = None


class ItemSetStat(Struct):
    indeces_for: Optional[List[int]] = None
    indeces_on: Optional[List[int]] = None
    size: Optional[int] = None
    avgs: Optional[List[float]] = None
    mins: Optional[List[float]] = None
    maxs: Optional[List[float]] = None
    std_devs: Optional[List[float]] = None
    missing_values: Optional[List[int]] = None


class GetMatrixStatParams(Struct):
    input_data: Optional[str] = None
    row_indeces: Optional[List[int]] = None
    column_indeces: Optional[List[int]] = None
    fl_row_set_stats: Optional[int] = None
    fl_column_set_stat: Optional[int] = None


class MatrixStat(Struct):
    mtx_descriptor: Optional[MatrixDescriptor] = None
    row_descriptors: Optional[List[ItemDescriptor]] = None
    column_descriptors: Optional[List[ItemDescriptor]] = None
    row_stats: Optional[List[ItemStat]] = None
    column_stats: Optional[List[ItemStat]] = None


class PairwiseComparison(Struct):
    indeces: Optional[List[int]] = None
    comparison_values: Optional[List[List[float]]] = None
    avgs: Optional[List[float]] = None
    mins: Optional[List[float]] = None
    maxs: Optional[List[float]] = None
    std_devs: Optional[List[float]] = None


class GetSubmatrixStatParams(Struct):
    input_data: Optional[str] = None
    row_indeces: Optional[List[int]] = None
    row_ids: Optional[List[str]] = None
    column_indeces: Optional[List[int]] = None
    column_ids: Optional[List[str]] = None
    fl_row_set_stats: Optional[int] = None
    fl_column_set_stat: Optional[int] = None
    fl_mtx_row_set_stat: Optional[int] = None
    fl_mtx_column_set_stat: Optional[int] = None
    fl_row_pairwise_correlation: Optional[int] = None
    fl_column_pairwise_correlation: Optional[int] = None
    fl_values: Optional[int] = None


class SubmatrixStat(Struct):
    mtx_descriptor: Optional[MatrixDescriptor] = None
    row_descriptors: Optional[List[ItemDescriptor]] = None
    column_descriptors: Optional[List[ItemDescriptor]] = None
    row_set_stats: Optional[ItemSetStat] = None
    column_set_stat: Optional[ItemSetStat] = None
    mtx_row_set_stat: Optional[ItemSetStat] = None
    mtx_column_set_stat: Optional[ItemSetStat] = None
    row_pairwise_correlation: Optional[PairwiseComparison] = None
    column_pairwise_correlation: Optional[PairwiseComparison] = None
    values: Optional[List[List[Optional[float]]]] = None


# ---------- import / export ----------

class TsvFileToMatrixParams(Struct):
    input_file_path: Optional[str] = None
    genome_ref: Optional[str] = None
    fill_missing_values: Optional[int] = None
    data_type: Optional[str] = None
    data_scale: Optional[str] = None
    output_ws_name: Optional[str] = None
    output_obj_name: Optional[str] = None


class TsvFileToMatrixOutput(Struct):
    output_matrix_ref: Optional[str] = None


class MatrixToTsvFileParams(Struct):
    input_ref: Optional[str] = None
    to_shock: Optional[int] = None
    file_path: Optional[str] = None


class MatrixToTsvFileOutput(Struct):
    file_path: Optional[str] = None
    shock_id: Optional[str] = None


class ExportMatrixParams(Struct):
    input_ref: Optional[str] = None


class ExportMatrixOutput(Struct):
    shock_id: Optional[str] = None


class ClustersToFileParams(Struct):
    input_ref: Optional[str] = None
    format: Optional[str] = None
    to_shock: Optional[int] = None
    file_path: Optional[str] = None


class ClustersToFileOutput(Struct):
    file_path: Optional[str] = None
    shock_id: Optional[str] = None


class ExportClustersTsvParams(Struct):
    input_ref: Optional[str] = None


class ExportClustersTsvOutput(Struct):
    shock_id: Optional[str] = None


class ExportClustersSifParams(Struct):
    input_ref: Optional[str] = None


class ExportClustersSifOutput(Struct):
    shock_id: Optional[str] = None


StatusInfo = Dict[str, Any]
