"""
Coreopts positional allocator.

allocate() hands the free values collected by the parser to the operand slots,
left to right:

- fixed slots (Exactly) take their count from the front
- variable slots (Range, AtLeast) take what is left once the minimums of the
  later slots are set aside ("SOURCE... DEST"), up to their maximum; the last
  unbounded slot takes all that remains (greedy captures included)

A slot whose own minimum cannot be met raises MissingOperandError naming it; a
variable slot with no minimum never does, so the shortfall is reported on the
later slot that needs the values (`[FILE]... DEST` with nothing given names
DEST). Values left over once every slot is served raise ExcessOperandError.
"""
import logging

from .faults import ExcessOperandError, MissingOperandError

logger = logging.getLogger(__name__)


def allocate(operands, values, /):
    """
    return [(operand, values), ...] in slot order, every slot included (an
    optional slot that received nothing gets an empty tuple).
    """
    operands = tuple(operands)
    values = tuple(values)
    allocation = []
    position = 0

    for index, operand in enumerate(operands):
        arity = operand.arity
        available = len(values) - position
        room = available - sum(later.arity.minimum for later in operands[index + 1:])

        if arity.minimum == arity.maximum:
            count = arity.minimum
            unmet = available < count
        else:
            count = max(room, 0)
            if arity.bounded:
                count = min(count, arity.maximum)
            unmet = count < arity.minimum

        if unmet:
            raise MissingOperandError(
                "missing %s operand" % operand.metavar + (" after %r" % values[position - 1] if position else ""),
                operand=operand.identity,
                metavar=operand.metavar,
                hint="%s expects at least %d value(s)" % (operand.metavar, arity.minimum),
            )

        claimed = values[position:position + count]
        position += count
        logger.debug("operand %s <- %r", operand.identity, claimed)
        allocation.append((operand, claimed))

    if position < len(values):
        raise ExcessOperandError(
            "extra operand %r" % values[position],
            input=values[position],
            extra=values[position:],
            hint="remove the extra value(s): %s" % " ".join(values[position:]),
        )

    return allocation


__all__ = (
    "allocate",
)
