import copy
import json
import pickle

import numpy as np
import pytest

from hashsplit import InvalidConfig, PartitionConfig


def test_binary_puts_test_on_the_low_buckets():
    config = PartitionConfig.binary(modulus=5, test_buckets=1)
    assert dict(config.labels) == {0: "test", 1: "train", 2: "train", 3: "train", 4: "train"}
    assert config.expected_fractions() == {"test": 0.2, "train": 0.8}


def test_config_is_immutable():
    config = PartitionConfig.binary()
    with pytest.raises(AttributeError):
        config.modulus = 10
    with pytest.raises(TypeError):
        config.labels[0] = "train"


def test_config_does_not_alias_the_input_mapping():
    labels = {0: "test", 1: "train"}
    config = PartitionConfig(2, labels)
    labels[0] = "train"
    assert config.label_for(0) == "test"


def test_equal_configs_compare_and_hash_equal():
    a = PartitionConfig(2, {0: "test", 1: "train"})
    b = PartitionConfig(2, {1: "train", 0: "test"})
    assert a == b
    assert hash(a) == hash(b)


@pytest.mark.parametrize(
    "modulus, labels",
    [
        (0, {}),
        (-3, {}),
        (True, {0: "train"}),
        (2.0, {0: "test", 1: "train"}),
        (3, {0: "test", 1: "train"}),
        (2, {0: "test", 1: "train", 2: "train"}),
        (2, {0: "test", -1: "train"}),
        (2, {0: "test", 1: ""}),
        (2, {0: "test", 1: None}),
        (2, {0: "test", "1": "train"}),
        (2, [(0, "test"), (1, "train")]),
    ],
)
def test_invalid_configs_are_rejected(modulus, labels):
    with pytest.raises(InvalidConfig):
        PartitionConfig(modulus, labels)


def test_from_buckets_rejects_overlap():
    with pytest.raises(InvalidConfig):
        PartitionConfig.from_buckets({"test": [0, 1], "train": [1, 2, 3, 4]}, modulus=5)


def test_from_buckets_rejects_gap():
    with pytest.raises(InvalidConfig):
        PartitionConfig.from_buckets({"test": [0], "train": [2, 3, 4]}, modulus=5)


def test_from_fractions_seventy_thirty():
    config = PartitionConfig.from_fractions({"train": 0.7, "test": 0.3}, modulus=10)
    assert config.bucket_count("train") == 7
    assert config.bucket_count("test") == 3
    assert [config.label_for(i) for i in range(10)] == ["train"] * 7 + ["test"] * 3


def test_from_fractions_drops_empty_labels():
    config = PartitionConfig.from_fractions({"train": 1.0, "test": 0.0}, modulus=100)
    assert config.label_set == ("train",)


@pytest.mark.parametrize(
    "fractions, modulus",
    [
        ({"train": 0.7, "test": 0.3}, 5),
        ({"train": 0.8, "test": 0.1}, 10),
        ({"train": 1.2, "test": -0.2}, 10),
        ({}, 10),
        ({"train": "0.8", "test": 0.2}, 10),
        ({"train": None, "test": 1.0}, 10),
    ],
)
def test_from_fractions_rejects_unrepresentable_splits(fractions, modulus):
    with pytest.raises(InvalidConfig):
        PartitionConfig.from_fractions(fractions, modulus=modulus)


def test_binary_validation():
    with pytest.raises(InvalidConfig):
        PartitionConfig.binary(modulus=5, test_buckets=6)
    with pytest.raises(InvalidConfig):
        PartitionConfig.binary(test_label="same", train_label="same")


def test_from_mapping_accepts_json():
    raw = json.loads('{"modulus": 3, "labels": {"0": "test", "1": "val", "2": "train"}}')
    config = PartitionConfig.from_mapping(raw)
    assert config == PartitionConfig(3, {0: "test", 1: "val", 2: "train"})
    assert config.label_set == ("test", "val", "train")


@pytest.mark.parametrize(
    "raw",
    [
        {"labels": {0: "train"}},
        {"modulus": 1},
        {"modulus": 1, "labels": {"zero": "train"}},
        {"modulus": 1, "labels": None},
        {"modulus": 1, "labels": 5},
        {"modulus": 2, "labels": {0: "test", "0": "train", 1: "train"}},
    ],
)
def test_from_mapping_rejects_malformed_input(raw):
    with pytest.raises(InvalidConfig):
        PartitionConfig.from_mapping(raw)


def test_config_survives_pickle_and_deepcopy():
    config = PartitionConfig.from_fractions({"train": 0.7, "test": 0.3}, modulus=10)
    restored = pickle.loads(pickle.dumps(config))
    assert restored == config
    assert dict(restored.labels) == dict(config.labels)
    assert copy.deepcopy(config) == config


def test_numpy_integers_are_accepted():
    config = PartitionConfig.from_buckets({"test": np.arange(1), "train": np.arange(1, 5)}, np.int64(5))
    assert config == PartitionConfig.binary(modulus=5, test_buckets=1)
    assert type(config.modulus) is int
    assert PartitionConfig.binary(modulus=np.int32(10), test_buckets=np.int64(3)).bucket_count("test") == 3
