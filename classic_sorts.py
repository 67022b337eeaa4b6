"""
Classic in-place comparison sorts and the order validator.

Every routine mutates the list it is given and returns None.
"""


# Order checking

def is_inversion(a, i):
    """
    Return True if the adjacent pair (a[i], a[i+1]) is out of order.
    Equal neighbours are fine: only a strictly smaller successor counts.
    """
    return a[i] > a[i + 1]


def first_inversion(a):
    """
    Return the index i of the first pair where a[i] > a[i+1], or None.

    Lists with fewer than two elements have no pairs, so they never
    contain an inversion.
    """
    for i in range(len(a) - 1):
        if is_inversion(a, i):
            return i
    return None


def is_sorted(a):
    """True iff a is in non-decreasing order."""
    return first_inversion(a) is None


# Sorts

def bubble_sort(a):
    """
    Bubble sort with early exit.

    Each pass carries the largest remaining value to the end of the
    unsorted prefix, so the prefix shrinks by one per pass.
    A pass that swaps nothing means the list is sorted; that makes an
    already sorted input O(n).
    """
    n = len(a)
    for done in range(n - 1):
        swapped = False
        for j in range(n - done - 1):
            if a[j] > a[j + 1]:
                a[j], a[j + 1] = a[j + 1], a[j]
                swapped = True
        if not swapped:
            break


def selection_sort(a):
    """
    Selection sort.

    Grows a sorted prefix by repeatedly moving the minimum of the
    remaining suffix into place. Always O(n^2) comparisons.
    """
    n = len(a)
    for i in range(n - 1):
        lo = i
        for j in range(i + 1, n):
            if a[j] < a[lo]:
                lo = j
        if lo != i:
            a[i], a[lo] = a[lo], a[i]


def insertion_sort(a):
    """
    Insertion sort.
    Very fast when the list is nearly sorted (few inversions).
    """
    for i in range(1, len(a)):
        key = a[i]
        j = i - 1
        while j >= 0 and a[j] > key:
            a[j + 1] = a[j]
            j -= 1
        a[j + 1] = key
