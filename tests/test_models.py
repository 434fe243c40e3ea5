"""
Serialization identity for every service structure
"""
import inspect

import pytest

from feature_values import models
from feature_values.models import Struct


STATS = {"avgs": [1.5, 2.0], "mins": [0.5], "maxs": [3.0], "std_devs": [0.25]}
DESCRIPTOR = {"matrix_id": "m1", "genome_id": "g1", "rows_count": 2, "columns_count": 1, "scale": "raw"}
ITEM = {"index": 0, "id": "gene1", "name": "thrA", "properties": {"function": "kinase"}}

SAMPLES = {
    "FloatMatrix2D": {"row_ids": ["g1", "g2"], "col_ids": ["c1"], "values": [[0.5], [None]]},
    "AnalysisReport": {"checkTypeDetected": "log2", "checkResults": [1, 0], "warnings": ["w"]},
    "ExpressionMatrix": {
        "type": "level",
        "scale": "log2",
        "genome_ref": "1/2/3",
        "feature_mapping": {"g1": "kb|g.0.peg.1"},
        "data": {"row_ids": ["g1"], "col_ids": ["c1"], "values": [[1.0]]},
        "report": {"messages": ["ok"]},
    },
    "EstimateKParams": {"input_matrix": "ws/e", "min_k": 2, "max_k": 6, "random_seed": 7},
    "EstimateKParamsNew": {"input_matrix": "ws/e", "criterion": "silhouette", "usepam": 1, "alpha": 0.1},
    "EstimateKResult": {"best_k": 3, "estimate_cluster_sizes": [[2, 0.25], [3, 0.75]]},
    "ClusterKMeansParams": {"k": 3, "input_data": "ws/e", "algorithm": "Hartigan-Wong", "out_workspace": "ws"},
    "ClusterHierarchicalParams": {"distance_metric": "cor", "linkage_criteria": "ward", "feature_height_cutoff": 0.5},
    "ClustersFromDendrogramParams": {"feature_dendrogram": "(a,b);", "feature_height_cutoff": 0.25},
    "EvaluateClustersetQualityParams": {"input_clusterset": "ws/c", "out_report_id": "r"},
    "ValidateMatrixParams": {"method": "KBaseFeatureValues.ExpressionMatrix", "input_data": "ws/e"},
    "CorrectMatrixParams": {"input_data": "ws/e", "transform_type": "missing", "transform_value": "0"},
    "ReconnectMatrixToGenomeParams": {"input_data": "ws/e", "genome_ref": "1/2/3"},
    "BuildFeatureSetParams": {"genome": "ws/g", "feature_ids": "a,b", "description": "set"},
    "GetMatrixDescriptorParams": {"input_data": "ws/e"},
    "MatrixDescriptor": DESCRIPTOR,
    "GetMatrixItemDescriptorsParams": {"input_data": "ws/e", "item_indeces_ordered": [1, 0]},
    "ItemDescriptor": ITEM,
    "GetMatrixItemsStatParams": {"input_data": "ws/e", "item_indeces_for": [0], "fl_avgs": 1},
    "ItemStat": {"index_for": 0, "indeces_on": [0, 1], "size": 2, "avg": 1.5, "min": 0.5, "missing_values": 0},
    "GetMatrixSetStatParams": {"item_indeces_for": [0, 1], "fl_avgs": 1, "fl_std_devs": 1},
    "GetMatrixSetsStatParams": {"input_data": "ws/e", "params": [{"item_indeces_for": [0], "fl_mins": 1}]},
    "ItemSetStat": dict(STATS, indeces_for=[0, 1], size=2, missing_values=[0, 1]),
    "GetMatrixStatParams": {"input_data": "ws/e", "row_indeces": [0], "fl_row_set_stats": 1},
    "MatrixStat": {
        "mtx_descriptor": DESCRIPTOR,
        "row_descriptors": [ITEM],
        "row_stats": [{"index_for": 0, "avg": 1.0}],
    },
    "PairwiseComparison": dict(STATS, indeces=[0, 1], comparison_values=[[1.0, 0.5], [0.5, 1.0]]),
    "GetSubmatrixStatParams": {"input_data": "ws/e", "row_ids": ["g1"], "fl_values": 1},
    "SubmatrixStat": {
        "mtx_descriptor": DESCRIPTOR,
        "column_descriptors": [ITEM],
        "row_set_stats": dict(STATS, size=2),
        "row_pairwise_correlation": {"indeces": [0], "comparison_values": [[1.0]]},
        "values": [[1.0, None]],
    },
    "TsvFileToMatrixParams": {"input_file_path": "/data/e.tsv", "fill_missing_values": 1, "output_ws_name": "ws"},
    "TsvFileToMatrixOutput": {"output_matrix_ref": "1/5/1"},
    "MatrixToTsvFileParams": {"input_ref": "1/5/1", "to_shock": 0, "file_path": "/tmp/e.tsv"},
    "MatrixToTsvFileOutput": {"file_path": "/tmp/e.tsv"},
    "ExportMatrixParams": {"input_ref": "1/5/1"},
    "ExportMatrixOutput": {"shock_id": "s1"},
    "ClustersToFileParams": {"input_ref": "1/6/1", "format": "SIF", "to_shock": 1},
    "ClustersToFileOutput": {"shock_id": "s2"},
    "ExportClustersTsvParams": {"input_ref": "1/6/1"},
    "ExportClustersTsvOutput": {"shock_id": "s3"},
    "ExportClustersSifParams": {"input_ref": "1/6/1"},
    "ExportClustersSifOutput": {"shock_id": "s4"},
}

STRUCTS = sorted(
    (obj for _, obj in inspect.getmembers(models, inspect.isclass) if issubclass(obj, Struct) and obj is not Struct),
    key=lambda cls: cls.__name__,
)


def test_every_structure_has_a_sample():
    assert sorted(SAMPLES) == [cls.__name__ for cls in STRUCTS]


@pytest.mark.parametrize("cls", STRUCTS, ids=lambda cls: cls.__name__)
def test_round_trip(cls):
    sample = SAMPLES[cls.__name__]
    value = cls.model_validate(sample)
    dumped = value.model_dump(mode="json", exclude_none=True)
    assert dumped == sample
    assert cls.model_validate(dumped) == value


@pytest.mark.parametrize("cls", STRUCTS, ids=lambda cls: cls.__name__)
def test_unknown_keys_are_kept(cls):
    sample = dict(SAMPLES[cls.__name__], added_by_newer_server={"k": [1, 2]})
    assert cls.model_validate(sample).model_dump(mode="json", exclude_none=True) == sample
