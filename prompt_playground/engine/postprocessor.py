"""
Post-processing of raw provider output.
"""

from typing import Optional, Sequence


def find_stop_index(output: str, stop_sequences: Sequence[str]) -> Optional[int]:
    """
    Find where the earliest stop sequence starts in the output.

    Args:
        output: Raw generated text
        stop_sequences: Candidate stop sequences; empty strings are skipped

    Returns:
        Smallest starting index among the sequences that occur, or None
    """
    earliest = None
    for sequence in stop_sequences:
        if not sequence:
            continue
        index = output.find(sequence)
        if index != -1 and (earliest is None or index < earliest):
            earliest = index
    return earliest


def trim_output(output: str, stop_sequences: Sequence[str]) -> str:
    """
    Truncate output before its earliest stop sequence.

    Example:
        >>> trim_output("xxxBxxxAxxx", ["A", "B"])
        'xxx'

    Args:
        output: Raw generated text
        stop_sequences: Ordered stop sequences

    Returns:
        The prefix of ``output`` before the earliest match, or ``output``
        unchanged when nothing matches
    """
    index = find_stop_index(output, stop_sequences)
    if index is None:
        return output
    return output[:index]
