import concurrent.futures
import logging
import timeit
from functools import wraps
from typing import Callable, Iterable, Optional

import pymarc

from marc_indexer.exceptions import MalformedIdentifierException, RequiredFieldException

log = logging.getLogger("marc_indexer")


def elapsedtime(func) -> Callable:
    """
    Provides the elapsed time for a method call. Used on the 'main' method to log the total
    time taken for indexing.
    """

    @wraps(func)
    def timed_f(*args, **kwargs) -> Callable:
        fname = func.__name__
        log.debug(" --- Timing execution for %s ---", fname)
        start = timeit.default_timer()
        ret = func(*args, **kwargs)
        end = timeit.default_timer()
        elapsed: float = end - start

        hours, remainder = divmod(elapsed, 60 * 60)
        minutes, seconds = divmod(remainder, 60)

        log.info(
            "Total time to run %s: %02i:%02i:%02.2f", fname, hours, minutes, seconds
        )
        return ret

    return timed_f


def parallelise(records: Iterable, func: Callable, *args, **kwargs) -> bool:
    """
    Given an iterable of record batches, submits each batch to `func` in a separate process.

    :param records: An iterable of items to be processed by `func`. Each is passed as the first argument
    :param func: A function to process and index the records. Must return a boolean status.
    :return: True if every call to `func` returned True.
    """
    res: bool = True

    with concurrent.futures.ProcessPoolExecutor() as executor:
        futures_list = [
            executor.submit(func, record, *args, **kwargs) for record in records
        ]

        for f in concurrent.futures.as_completed(futures_list):
            res &= bool(f.result())

    return res


def unique(values: Iterable[Optional[str]]) -> list[str]:
    """Drops blanks and duplicates, keeping the first occurrence of each value in order."""
    # Creating a dictionary guarantees insertion order.
    return list(dict.fromkeys(v for v in values if v))


def normalize_id(identifier: str) -> str:
    """
    Record identifiers (e.g., Alma MMS IDs) are numeric, but can come through with padding or
    leading zeroes. Parsing as an integer and returning it as a string gives a consistent value.

    :param identifier: An identifier to normalize
    :return: A normalized identifier
    """
    try:
        idval: int = int(identifier)
    except (TypeError, ValueError) as err:
        raise MalformedIdentifierException(
            f"The identifier {identifier} is not well-formed."
        ) from err

    return f"{idval}"


def record_id(record: pymarc.Record) -> Optional[str]:
    """The raw value of the 001 control field, used to identify a record in log messages."""
    fields: list[pymarc.Field] = record.get_fields("001")
    if not fields:
        return None

    return fields[0].data.strip() if fields[0].data else None


def to_solr_single(
    record: pymarc.Record,
    field: str,
    subfield: Optional[str] = None,
    sortout: Optional[bool] = True,
) -> Optional[str]:
    """
    Extracts a single value from the MARC record. Always takes the first instance of the
    tag, and the first instance of the subfield within that tag.
    """
    values: Optional[list[str]] = to_solr_multi(record, field, subfield, sortout)

    if not values:
        return None

    return values[0]


def to_solr_single_required(
    record: pymarc.Record,
    field: str,
    subfield: Optional[str] = None,
    sortout: Optional[bool] = True,
) -> str:
    """
    Same operations as the to_solr_single, but raises an exception if the value is not found.
    """
    values: Optional[list[str]] = to_solr_multi(record, field, subfield, sortout)

    if not values:
        rec_id: Optional[str] = record_id(record)
        log.error(
            "%s requires a value, but one was not found for %s.", field, rec_id
        )
        raise RequiredFieldException(
            f"{field} requires a value, but one was not found for {rec_id}."
        )

    return values[0]


def to_solr_multi(
    record: Optional[pymarc.Record],
    field: str,
    subfield: Optional[str] = None,
    sortout: Optional[bool] = True,
) -> Optional[list[str]]:
    """
    Returns all the values for a given field and subfield, with duplicates removed.

    :param record: A pymarc.Record instance
    :param field: A string indicating the tag that should be extracted
    :param subfield: An optional subfield. If this is not provided, the full value of the field will be returned.
    :param sortout: If True then the output will be sorted; if False then it will be in record order.
    :return: A list of strings, or None if there wasn't a subfield that was found that matched the parameters.
    """
    if not record:
        return None

    fields: list[pymarc.Field] = record.get_fields(field)
    if not fields:
        return None

    retval: list[str]
    if subfield is None:
        retval = [f.value().strip() for f in fields if f]
    else:
        retval = [subf.strip() for fl in fields for subf in fl.get_subfields(subfield) if subf]

    retval = [v for v in retval if v]
    if not retval:
        return None

    if sortout:
        # using a set is simpler, but order is not guaranteed.
        return sorted(set(retval))

    return unique(retval)


def to_solr_multi_required(
    record: pymarc.Record,
    field: str,
    subfield: Optional[str] = None,
    sortout: Optional[bool] = True,
) -> list[str]:
    """
    The same operation as to_solr_multi, except this function must return at least one value otherwise it
    will raise an exception.
    """
    ret: Optional[list[str]] = to_solr_multi(record, field, subfield, sortout)

    if ret is None:
        rec_id: Optional[str] = record_id(record)
        log.error(
            "%s, %s requires a value, but one was not found for %s",
            field,
            subfield,
            rec_id,
        )
        raise RequiredFieldException(
            f"{field}, {subfield} requires a value, but one was not found for {rec_id}."
        )

    return ret
