"""Tests for least-loaded broker allocation."""

import random

import pytest

from statictopic.mapping.allocator import MappingAllocator, build_mapping_allocator
from statictopic.mapping.errors import AllocationError

BROKERS = ["broker-a", "broker-b", "broker-c"]


def fresh_allocator(seed=7, brokers=BROKERS):
    return build_mapping_allocator({}, {b: 0 for b in brokers}, rng=random.Random(seed))


class TestMappingAllocator:
    """Test MappingAllocator."""
    
    def test_factory(self):
        """Test factory returns an allocator."""
        assert isinstance(fresh_allocator(), MappingAllocator)
    
    def test_seed_maps_copied(self):
        """Test the allocator never mutates the caller's maps."""
        id_to_broker = {0: "broker-a"}
        broker_num_map = {"broker-a": 1, "broker-b": 0}
        
        allocator = build_mapping_allocator(id_to_broker, broker_num_map)
        allocator.up_to_num(4)
        
        assert id_to_broker == {0: "broker-a"}
        assert broker_num_map == {"broker-a": 1, "broker-b": 0}
        assert len(allocator.id_to_broker) == 4
    
    @pytest.mark.parametrize("target", [1, 3, 7, 10, 31])
    def test_balanced_growth(self, target):
        """Test equal starting loads stay within one of each other."""
        allocator = fresh_allocator()
        
        allocator.up_to_num(target)
        
        counts = allocator.broker_num_map.values()
        assert max(counts) - min(counts) <= 1
        assert sum(counts) == target
        assert sorted(allocator.id_to_broker) == list(range(target))
    
    def test_counts_match_assignment(self):
        """Test broker counts agree with the id -> broker map."""
        allocator = fresh_allocator()
        
        allocator.up_to_num(11)
        
        for broker in BROKERS:
            assigned = [b for b in allocator.id_to_broker.values() if b == broker]
            assert allocator.broker_num_map[broker] == len(assigned)
    
    def test_incremental_growth_matches_single_growth(self):
        """Test 0 -> k -> N ends with the same load shape as 0 -> N."""
        single = fresh_allocator(seed=1)
        single.up_to_num(10)
        
        stepped = fresh_allocator(seed=2)
        stepped.up_to_num(4)
        stepped.up_to_num(10)
        
        assert len(stepped.id_to_broker) == 10
        assert sorted(stepped.broker_num_map.values()) == sorted(single.broker_num_map.values())
    
    def test_no_op_growth(self):
        """Test growing to a size already reached changes nothing."""
        allocator = fresh_allocator()
        allocator.up_to_num(5)
        id_to_broker = dict(allocator.id_to_broker)
        broker_num_map = dict(allocator.broker_num_map)
        
        allocator.up_to_num(5)
        allocator.up_to_num(2)
        
        assert allocator.id_to_broker == id_to_broker
        assert allocator.broker_num_map == broker_num_map
    
    def test_extends_existing_assignment(self):
        """Test new ids start after the existing ones and go to the idle broker."""
        allocator = build_mapping_allocator(
            {0: "broker-a", 1: "broker-b"},
            {"broker-a": 1, "broker-b": 1, "broker-c": 0},
        )
        
        allocator.up_to_num(3)
        
        assert allocator.id_to_broker[0] == "broker-a"
        assert allocator.id_to_broker[1] == "broker-b"
        assert allocator.id_to_broker[2] == "broker-c"
        assert allocator.broker_num_map["broker-c"] == 1
    
    def test_uneven_start_fills_lightest_first(self):
        """Test the lightest broker catches up before others receive queues."""
        allocator = build_mapping_allocator(
            {},
            {"broker-a": 0, "broker-b": 2, "broker-c": 2},
            rng=random.Random(3),
        )
        
        allocator.up_to_num(2)
        assert allocator.id_to_broker == {0: "broker-a", 1: "broker-a"}
        
        allocator.up_to_num(5)
        assert allocator.broker_num_map == {"broker-a": 3, "broker-b": 3, "broker-c": 3}
    
    def test_tied_band_visited_once_each(self):
        """Test each tied broker is used once before any is reused."""
        allocator = fresh_allocator(seed=11)
        
        allocator.up_to_num(3)
        
        assert sorted(allocator.id_to_broker.values()) == sorted(BROKERS)
    
    def test_seeded_rng_is_deterministic(self):
        """Test the same seed yields the same assignment."""
        first = fresh_allocator(seed=99)
        second = fresh_allocator(seed=99)
        
        first.up_to_num(12)
        second.up_to_num(12)
        
        assert first.id_to_broker == second.id_to_broker
    
    def test_sparse_seed_rejected(self):
        """Test a seed with gaps in its ids is refused before any growth."""
        id_to_broker = {1: "broker-a", 2: "broker-b"}
        broker_num_map = {"broker-a": 1, "broker-b": 1, "broker-c": 0}
        
        with pytest.raises(AllocationError, match="contiguous"):
            build_mapping_allocator(id_to_broker, broker_num_map)
        
        assert id_to_broker == {1: "broker-a", 2: "broker-b"}
        assert broker_num_map == {"broker-a": 1, "broker-b": 1, "broker-c": 0}
    
    def test_growth_keeps_existing_ids(self):
        """Test growth never reassigns a seeded id and counts stay in step."""
        allocator = build_mapping_allocator(
            {0: "broker-a", 1: "broker-b", 2: "broker-b"},
            {"broker-a": 1, "broker-b": 2, "broker-c": 0},
            rng=random.Random(5),
        )
        
        allocator.up_to_num(6)
        
        assert allocator.id_to_broker[1] == "broker-b"
        assert allocator.id_to_broker[2] == "broker-b"
        assert sorted(allocator.id_to_broker) == list(range(6))
        for broker, num in allocator.broker_num_map.items():
            assigned = [b for b in allocator.id_to_broker.values() if b == broker]
            assert num == len(assigned)
    
    def test_no_brokers(self):
        """Test growth without any broker fails."""
        allocator = build_mapping_allocator({}, {})
        
        with pytest.raises(AllocationError):
            allocator.up_to_num(1)


class TestLeastLoadedSelection:
    """
    Test selection of the least loaded brokers.
    
    Candidates are every broker at the true minimum load, whatever the
    iteration order of the load map. A running minimum that is never
    updated would instead keep only the last broker iterated.
    """
    
    def test_true_minimum_not_last_iterated(self):
        """Test the idle broker wins even when iterated first."""
        allocator = build_mapping_allocator({}, {"broker-b": 0, "broker-a": 5})
        
        allocator.up_to_num(1)
        
        assert allocator.id_to_broker == {0: "broker-b"}
    
    def test_all_tied_brokers_are_candidates(self):
        """Test every broker at the minimum can be chosen."""
        chosen = set()
        for seed in range(50):
            allocator = build_mapping_allocator(
                {},
                {"broker-a": 0, "broker-b": 0, "broker-c": 4},
                rng=random.Random(seed),
            )
            allocator.up_to_num(1)
            chosen.add(allocator.id_to_broker[0])
        
        assert chosen == {"broker-a", "broker-b"}
