"""
brinestore — Lists

Lists are ordered and heterogeneous.  Creating a list returns an extender
so several appends can be chained.
"""

from brinestore import BrineStore, DumpPolicy


def main():
    db = BrineStore.new_json("lists_example.db", DumpPolicy.upon_request())

    db.list_create("list1").append(100).append(200).append(300)
    db.list_create("list2").extend([1.1, 2.2, 3.3]).append("a string")

    print(f"list1 has {db.list_length('list1')} items, list2 has {db.list_length('list2')}")
    print(f"The first item of list1 is {db.list_get('list1', 0, int)}")
    print(f"The last item of list2 is {db.list_get('list2', 3, str)}")

    for item in db.list_iter("list2"):
        print(f"  list2 item: {item.get_item()}")

    popped = db.list_remove_at("list1", 1, int)
    print(f"Popped {popped}, list1 now has {db.list_length('list1')} items")

    db.list_remove_value("list2", "a string")
    print(f"Removed 'a string', list2 now has {db.list_length('list2')} items")

    # nothing is on disk until we ask
    db.dump()


if __name__ == "__main__":
    main()
