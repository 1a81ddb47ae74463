import sys
import os

# Add project root to path for imports
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from rng_facade.core import facade


def main() -> None:
    """
    Print one draw from every facade operation on this thread's default generator.
    """
    candidates = ["north", "south", "east", "west"]
    deck = list(range(10))
    facade.shuffle(deck)

    print(f"number(1, 6)                      = {facade.number(1, 6)}")
    print(f"number(0.0, 1.0)                  = {facade.number(0.0, 1.0):.6f}")
    print(f"weighted_number(50)               = {facade.weighted_number(50)}")
    print(f"weighted_number_in_range(0,10,5,1)= {facade.weighted_number_in_range(0.0, 10.0, 5.0, 1.0):.4f}")
    print(f"percentage(30)                    = {facade.percentage(30)}")
    print(f"uuid64()                          = {facade.uuid64():#018x}")
    print(f"uuid128()                         = {facade.uuid128()}")
    print(f"index({candidates})  = {facade.index(candidates)}")
    print(f"weighted_index(deck, 5, 2.0)      = {facade.weighted_index(deck, 5, 2.0)}")
    print(f"pick_from_list([5, 2, 9])         = {facade.pick_from_list([5, 2, 9])}")
    print(f"shuffle(range(10))                = {deck}")


if __name__ == "__main__":
    main()
