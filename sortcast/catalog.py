"""Registry of the ten algorithms plus the info-panel text shown beside them."""

from __future__ import annotations

from collections.abc import Callable
from typing import NamedTuple

from sortcast import algorithms
from sortcast.errors import UnknownAlgorithmError


class AlgorithmInfo(NamedTuple):
    key: str
    name: str
    average: str
    space: str
    pseudocode: str
    sort: Callable


_INFO = [
    AlgorithmInfo(
        "bubble", "Bubble Sort", "O(n²)", "O(1)",
        "bubbleSort(A):\n"
        "  for i=0..n-1:\n"
        "    for j=0..n-i-2:\n"
        "      if A[j]>A[j+1]: swap A[j], A[j+1]",
        algorithms.bubble_sort,
    ),
    AlgorithmInfo(
        "selection", "Selection Sort", "O(n²)", "O(1)",
        "for i in 0..n-1:\n"
        "  minIndex = i\n"
        "  for j in i+1..n:\n"
        "    if A[j] < A[minIndex]: minIndex = j\n"
        "  swap A[i], A[minIndex]",
        algorithms.selection_sort,
    ),
    AlgorithmInfo(
        "insertion", "Insertion Sort", "O(n²)", "O(1)",
        "for i in 1..n-1:\n"
        "  key = A[i]\n"
        "  j = i-1\n"
        "  while j>=0 and A[j] > key:\n"
        "    A[j+1] = A[j]\n"
        "    j--\n"
        "  A[j+1] = key",
        algorithms.insertion_sort,
    ),
    AlgorithmInfo(
        "quick", "Quick Sort", "O(n log n)", "O(n)",
        "quickSort(A, low, high):\n"
        "  if low < high:\n"
        "    pi = partition(A, low, high)\n"
        "    quickSort(A, low, pi-1)\n"
        "    quickSort(A, pi+1, high)",
        algorithms.quick_sort,
    ),
    AlgorithmInfo(
        "merge", "Merge Sort", "O(n log n)", "O(n)",
        "mergeSort(A, l, r):\n"
        "  if l < r:\n"
        "    m = (l + r)//2\n"
        "    mergeSort(A, l, m)\n"
        "    mergeSort(A, m+1, r)\n"
        "    merge(A, l, m, r)",
        algorithms.merge_sort,
    ),
    AlgorithmInfo(
        "heap", "Heap Sort", "O(n log n)", "O(1)",
        "heapSort(A):\n"
        "  buildMaxHeap(A)\n"
        "  for i=n-1..1:\n"
        "    swap A[0], A[i]\n"
        "    heapify(A, 0, i)",
        algorithms.heap_sort,
    ),
    AlgorithmInfo(
        "radix", "Radix Sort", "O(nk)", "O(n+k)",
        "radixSort(A):\n"
        "  maxVal = max(A)\n"
        "  exp = 1\n"
        "  while maxVal/exp > 0:\n"
        "    countingSort(A, exp)\n"
        "    exp *= 10",
        algorithms.radix_sort,
    ),
    AlgorithmInfo(
        "shell", "Shell Sort", "O(n log n)", "O(1)",
        "shellSort(A):\n"
        "  gap = n/2\n"
        "  while gap > 0:\n"
        "    for i=gap..n-1:\n"
        "      temp = A[i]\n"
        "      j = i\n"
        "      while j>=gap and A[j-gap]>temp:\n"
        "        A[j] = A[j-gap]\n"
        "        j -= gap\n"
        "      A[j] = temp\n"
        "    gap /= 2",
        algorithms.shell_sort,
    ),
    AlgorithmInfo(
        "cocktail", "Cocktail Shaker Sort", "O(n²)", "O(1)",
        "cocktailShakerSort(A):\n"
        "  swapped = true\n"
        "  start = 0\n"
        "  end = n-1\n"
        "  while swapped:\n"
        "    swapped = false\n"
        "    for i=start..end-1:\n"
        "      if A[i] > A[i+1]: swap\n"
        "    end--\n"
        "    for i=end-1..start:\n"
        "      if A[i] > A[i+1]: swap\n"
        "    start++",
        algorithms.cocktail_sort,
    ),
    AlgorithmInfo(
        "gnome", "Gnome Sort", "O(n²)", "O(1)",
        "gnomeSort(A):\n"
        "  i = 0\n"
        "  while i < n:\n"
        "    if i==0 or A[i] >= A[i-1]: i++\n"
        "    else:\n"
        "      swap A[i], A[i-1]\n"
        "      i--",
        algorithms.gnome_sort,
    ),
]

ALGORITHMS = [(info.name, info.key) for info in _INFO]

_BY_NAME = {}
for _info in _INFO:
    _BY_NAME[_info.key] = _info
    _BY_NAME[_info.name.lower()] = _info


def get_algorithm(name: str) -> AlgorithmInfo:
    """Look an algorithm up by key (``"quick"``) or display name (``"Quick Sort"``)."""
    info = _BY_NAME.get(str(name).strip().lower())
    if info is None:
        raise UnknownAlgorithmError(f"Unknown algorithm: {name!r}")
    return info


def describe(name: str) -> str:
    info = get_algorithm(name)
    return (
        f"{info.name}\n"
        f"Average time: {info.average}   Space: {info.space}\n\n"
        f"Pseudo Code\n\n{info.pseudocode}"
    )
