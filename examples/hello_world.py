"""
brinestore — Hello World

Keys hold a value or a list.  Everything lives in memory and is written
to one file according to the store's dump policy.
"""

from dataclasses import dataclass

from brinestore import BrineStore, DumpPolicy, SerializationMethod


@dataclass
class Rectangle:
    width: int
    length: int


def main():
    # ──────────────────────────────────────
    #  1. Create a store that dumps after every change
    # ──────────────────────────────────────
    with BrineStore.new("example.db", DumpPolicy.auto(), SerializationMethod.JSON) as db:
        # ──────────────────────────────────────
        #  2. Store values of any type
        # ──────────────────────────────────────
        db.set("key1", 100)
        db.set("key2", 1.1)
        db.set("key3", "hello world")
        db.set("key4", [1, 2, 3])
        db.set("key5", Rectangle(width=4, length=10))

        # ──────────────────────────────────────
        #  3. Read them back, asking for the type you expect
        # ──────────────────────────────────────
        print(f"The value of key1 is: {db.get('key1', int)}")
        print(f"The value of key2 is: {db.get('key2', float)}")
        print(f"The value of key3 is: {db.get('key3', str)}")
        print(f"The value of key4 is: {db.get('key4', list[int])}")
        print(f"The value of key5 is: {db.get('key5', Rectangle)}")

        # the wrong type simply gives None
        print(f"key1 as a string: {db.get('key1', str)}")

    # ──────────────────────────────────────
    #  4. Load the file again, read-only
    # ──────────────────────────────────────
    db2 = BrineStore.load_read_only("example.db", SerializationMethod.JSON)
    for item in db2.iter():
        print(f"{item.key} = {item.get_value()}")


if __name__ == "__main__":
    main()
