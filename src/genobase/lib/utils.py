from itertools import islice
from typing import Iterable, Iterator, TypeVar

T = TypeVar("T")


# TODO: When we require Python 3.12, replace this with the built-in `itertools.batched` method.
def batched(iterable: Iterable[T], n: int) -> Iterator[list[T]]:
    """
    Yield successive n-sized chunks from iterable. The last chunk may be shorter.
    """
    iterator = iter(iterable)
    while batch := list(islice(iterator, n)):
        yield batch
