import pytest

from mesa_lite import EmptyInputError, InvalidParameterError, RandomStream


class Test_RandomStream:
    def test_same_seed_same_sequence(self):
        a = RandomStream(7)
        b = RandomStream(7)
        items = list(range(20))

        assert [a.random() for _ in range(5)] == [b.random() for _ in range(5)]
        assert a.shuffle(items) == b.shuffle(items)
        assert a.choice(items) == b.choice(items)
        assert a.choices(items, 6) == b.choices(items, 6)
        assert a.integers(100) == b.integers(100)

    def test_different_seeds_diverge(self):
        a = RandomStream(1)
        b = RandomStream(2)
        assert [a.random() for _ in range(10)] != [b.random() for _ in range(10)]

    def test_reseed(self):
        stream = RandomStream(3)
        first = [stream.random() for _ in range(3)]
        stream.seed(3)
        assert [stream.random() for _ in range(3)] == first
        assert stream.seed_value == 3

    def test_no_seed_is_recorded(self):
        stream = RandomStream()
        replay = RandomStream(stream.seed_value)
        assert stream.random() == replay.random()

    def test_random_range(self):
        stream = RandomStream(0)
        values = [stream.random() for _ in range(1000)]
        assert all(0.0 <= v < 1.0 for v in values)

    def test_integers(self):
        stream = RandomStream(0)
        values = [stream.integers(2, 5) for _ in range(200)]
        assert set(values) == {2, 3, 4}
        assert all(isinstance(v, int) for v in values)

    def test_choice(self):
        stream = RandomStream(0)
        items = ["a", "b", "c"]
        picks = {stream.choice(items) for _ in range(100)}
        assert picks == set(items)
        # Non-sequence collections are accepted
        assert stream.choice({"x"}) == "x"

    def test_choice_empty(self):
        stream = RandomStream(0)
        with pytest.raises(EmptyInputError):
            stream.choice([])
        # EmptyInputError is also an IndexError
        with pytest.raises(IndexError):
            stream.choice(())

    def test_shuffle_is_a_permutation(self):
        stream = RandomStream(0)
        items = list(range(50))
        shuffled = stream.shuffle(items)
        assert sorted(shuffled) == items
        assert shuffled != items
        # The input is left untouched
        assert items == list(range(50))
        assert stream.shuffle([]) == []

    def test_choices(self):
        stream = RandomStream(0)
        picks = stream.choices(["a", "b"], 10)
        assert len(picks) == 10
        assert set(picks) <= {"a", "b"}
        assert stream.choices(["a"], 0) == []
        assert stream.choices([], 0) == []

    def test_choices_invalid(self):
        stream = RandomStream(0)
        with pytest.raises(InvalidParameterError):
            stream.choices(["a"], -1)
        with pytest.raises(EmptyInputError):
            stream.choices([], 3)
