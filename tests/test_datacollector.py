import os
import tempfile

import polars as pl
import pytest

from mesa_lite import DataCollector, Model, UnknownAttributeError


def custom_trigger(model):
    return model.steps % 2 == 0


@pytest.fixture
def fix1_model() -> Model:
    return Model(5, 3, 3, seed=42)


class TestDataCollector:
    def test__init__(self, fix1_model):
        model = fix1_model

        model.test_dc = DataCollector(
            model=model, agent_reporters={"wealth": lambda agent: 1}
        )
        assert model.test_dc is not None
        assert model.test_dc.seed == 42
        assert model.test_dc.columns == {"model": [], "agent": ["wealth"]}

        # Unknown names fail when the collector is built, not when it collects
        with pytest.raises(UnknownAttributeError, match="Unknown attribute 'age'"):
            DataCollector(model=model, agent_reporters={"age": "age"})
        with pytest.raises(UnknownAttributeError):
            DataCollector(model=model, model_reporters={"mean_age": "mean_age"})

        with pytest.raises(
            ValueError,
            match="Please define a storage_uri to if to be stored not in memory",
        ):
            DataCollector(model=model, storage="csv")

        with pytest.raises(ValueError, match="Unknown storage"):
            DataCollector(model=model, storage="postgresql", storage_uri="db")

    def test_collect(self, fix1_model):
        model = fix1_model

        model.dc = DataCollector(
            model=model,
            model_reporters={
                "total_wealth": "total_wealth",
                "n": lambda model: len(model.population),
            },
            agent_reporters={
                "wealth": "wealth",
                "double_wealth": lambda agent: agent.wealth * 2,
            },
            collect_on_step=False,
        )

        model.dc.collect()
        collected_data = model.dc.data

        assert collected_data["model"].columns == ["step", "seed", "total_wealth", "n"]
        assert collected_data["model"]["step"].to_list() == [0]
        assert collected_data["model"]["seed"].to_list() == ["42"]
        assert collected_data["model"]["total_wealth"].to_list() == [5]
        assert collected_data["model"]["n"].to_list() == [5]

        agent_df = collected_data["agent"]
        assert agent_df.columns == ["step", "seed", "unique_id", "wealth", "double_wealth"]
        assert agent_df["unique_id"].to_list() == [0, 1, 2, 3, 4]
        assert agent_df["wealth"].to_list() == [1] * 5
        assert agent_df["double_wealth"].to_list() == [2] * 5
        assert agent_df["step"].dtype == pl.Int64

        # Without the step hook, stepping collects nothing
        model.step()
        assert model.dc.data["model"].height == 1

    def test_collect_step(self, fix1_model):
        model = fix1_model
        model.dc = DataCollector(
            model=model,
            model_reporters={"total_wealth": "total_wealth", "gini": "gini"},
            agent_reporters={"wealth": "wealth"},
        )
        model.run_model(3)

        model_df = model.dc.data["model"]
        # Each row is collected before the step runs
        assert model_df["step"].to_list() == [0, 1, 2]
        assert model_df["total_wealth"].to_list() == [5, 5, 5]
        assert model_df["gini"].to_list()[0] == 0.0

        agent_df = model.dc.data["agent"]
        assert agent_df.height == 15
        assert agent_df.group_by("step").agg(pl.col("wealth").sum())["wealth"].to_list() == [5, 5, 5]

    def test_conditional_collect(self, fix1_model):
        model = fix1_model
        model.dc = DataCollector(
            model=model,
            trigger=custom_trigger,
            model_reporters={"steps": "steps"},
        )
        model.run_model(5)
        assert model.dc.data["model"]["step"].to_list() == [0, 2, 4]
        assert model.dc.data["model"]["steps"].to_list() == [0, 2, 4]
        assert model.dc.data["agent"].is_empty()

        # collect ignores the trigger
        model.dc.collect()
        assert model.dc.data["model"]["step"].to_list() == [0, 2, 4, 5]

    def test_flush_local_csv(self, fix1_model):
        with tempfile.TemporaryDirectory() as tmpdir:
            model = fix1_model
            model.dc = DataCollector(
                model=model,
                model_reporters={"total_wealth": "total_wealth"},
                agent_reporters={"wealth": "wealth"},
                storage="csv",
                storage_uri=tmpdir,
            )

            model.run_model(2)
            model.dc.flush().result()

            # check deletion after flush
            collected_data = model.dc.data
            assert collected_data["model"].shape == (0, 0)
            assert collected_data["agent"].shape == (0, 0)

            created_files = sorted(os.listdir(tmpdir))
            assert created_files == [
                "agent_step0.csv",
                "agent_step1.csv",
                "model_step0.csv",
                "model_step1.csv",
            ]

            model_df = pl.read_csv(
                os.path.join(tmpdir, "model_step1.csv"),
                schema_overrides={"seed": pl.Utf8},
            )
            assert model_df.columns == ["step", "seed", "total_wealth"]
            assert model_df["step"].to_list() == [1]
            assert model_df["total_wealth"].to_list() == [5]

            agent_df = pl.read_csv(
                os.path.join(tmpdir, "agent_step1.csv"),
                schema_overrides={"seed": pl.Utf8},
            )
            assert agent_df.columns == ["step", "seed", "unique_id", "wealth"]
            assert agent_df["wealth"].sum() == 5
            model.dc._executor.shutdown()

    def test_flush_local_parquet(self, fix1_model):
        with tempfile.TemporaryDirectory() as tmpdir:
            model = fix1_model
            model.dc = DataCollector(
                model=model,
                model_reporters={"gini": "gini"},
                storage="parquet",
                storage_uri=os.path.join(tmpdir, "nested"),
                reset_memory=False,
            )

            model.run_model(1)
            model.dc.flush().result()

            # reset_memory=False keeps the in-memory data
            assert model.dc.data["model"].height == 1
            assert os.listdir(os.path.join(tmpdir, "nested")) == ["model_step0.parquet"]
            model_df = pl.read_parquet(os.path.join(tmpdir, "nested", "model_step0.parquet"))
            assert model_df["gini"].to_list() == [0.0]
            model.dc._executor.shutdown()
