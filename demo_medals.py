#!/usr/bin/env python3
"""
Medal Demo: declare -> query -> compare -> serialize

Shows the full workflow on the example record types:
1. Enumerate the constants of a type
2. Look records up by identifier and by attribute
3. Compare records
4. Serialize nested records to JSON and YAML
"""

from constant_record.examples import Competition, Medal, Rank


def main():
    print("=" * 80)
    print("MEDAL DEMO: Declare -> Query -> Compare -> Serialize")
    print("=" * 80)

    # =========================================================================
    # STEP 1: Enumerate
    # =========================================================================
    print("\n1. ENUMERATING RECORDS...")
    print(f"   ✓ Rank attributes: {Rank.accessors()}")
    print(f"   ✓ Medal attributes: {Medal.accessors()}")
    for rank in Rank:
        print(f"   ✓ {rank!r}")

    # =========================================================================
    # STEP 2: Query
    # =========================================================================
    print("\n2. QUERYING...")
    print(f"   ✓ find(1): {Rank.find(1)!r}")
    print(f"   ✓ find(0): {Rank.find(0)!r}")
    print(f"   ✓ find_by(name='Silver'): {Rank.find_by(name='Silver')!r}")
    print(f"   ✓ pluck('symbol'): {Rank.pluck('symbol')}")
    print(f"   ✓ pluck('id', 'name'): {Rank.pluck('id', 'name')}")

    # =========================================================================
    # STEP 3: Compare
    # =========================================================================
    print("\n3. COMPARING...")
    print(f"   ✓ GOLD vs SILVER: {Rank.GOLD.compare(Rank.SILVER)}")
    print(f"   ✓ SILVER vs GOLD: {Rank.SILVER.compare(Rank.GOLD)}")
    print(f"   ✓ GOLD.is_gold(): {Rank.GOLD.is_gold()}")
    print(f"   ✓ SILVER.is_gold(): {Rank.SILVER.is_gold()}")

    # =========================================================================
    # STEP 4: Serialize
    # =========================================================================
    print("\n4. SERIALIZING...")
    print(f"   ✓ JSON: {Competition.SPRINT.to_json()}")
    print("   ✓ YAML:")
    for line in Competition.SPRINT.to_yaml().splitlines():
        print(f"       {line}")

    print("\n" + "=" * 80)


if __name__ == "__main__":
    main()
