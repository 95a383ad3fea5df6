# foodshare/services/schedule/slot_policy.py
"""Per business-type rules for the time slots of one schedule day"""
from typing import Dict, List, Optional, Sequence, Union
import logging

from pydantic import ValidationError as SchemaValidationError

from foodshare.core.errors import PolicyViolation, ValidationError
from foodshare.schemas.schedule import ScheduleBusinessType, SlotType, TimeSlot

logger = logging.getLogger(__name__)

# Restaurant slots starting before this are lunch collections
EVENING_STARTS_AT = "15:00"


class SlotPolicy:
    """Slot-count limit and default labelling for a schedule business type"""

    def __init__(
            self,
            business_type: ScheduleBusinessType,
            max_slots: Optional[int],
            default_type: SlotType
    ):
        self.business_type = business_type
        self.max_slots = max_slots
        self.default_type = default_type

    def check_count(self, count: int) -> None:
        if self.max_slots is not None and count > self.max_slots:
            logger.warning(
                f"Rejected {count} slots for {self.business_type.value} (max {self.max_slots})"
            )
            raise PolicyViolation(
                f"{self.business_type.value} schedules allow at most {self.max_slots} slot(s)",
                business_type=self.business_type.value,
                max_slots=self.max_slots,
            )

    def default_label(self, slot: TimeSlot, position: int, count: int) -> str:
        return f"Créneau {position + 1}"

    def default_slot_type(self, slot: TimeSlot, position: int, count: int) -> SlotType:
        return self.default_type

    def apply(self, slots: Sequence[Union[TimeSlot, Dict]]) -> List[Dict]:
        """
        Validate slots and fill in missing labels and types.

        Raises PolicyViolation when the slot count exceeds the limit, when a
        slot does not end after it starts, or when two slots overlap.
        """
        try:
            parsed = [s if isinstance(s, TimeSlot) else TimeSlot(**s) for s in slots]
        except SchemaValidationError as e:
            raise ValidationError("Invalid time slot") from e
        self.check_count(len(parsed))

        for slot in parsed:
            if slot.start_time >= slot.end_time:
                raise PolicyViolation(f"Slot {slot.start_time}-{slot.end_time} must end after it starts")

        ordered = sorted(parsed, key=lambda s: s.start_time)
        for previous, current in zip(ordered, ordered[1:]):
            if current.start_time < previous.end_time:
                raise PolicyViolation(
                    f"Slots {previous.start_time}-{previous.end_time} and "
                    f"{current.start_time}-{current.end_time} overlap"
                )

        result = []
        for position, slot in enumerate(ordered):
            result.append({
                "start_time": slot.start_time,
                "end_time": slot.end_time,
                "label": slot.label or self.default_label(slot, position, len(ordered)),
                "type": (slot.type or self.default_slot_type(slot, position, len(ordered))).value,
            })
        return result


class RestaurantSlotPolicy(SlotPolicy):
    """Up to two collections: lunch (Matin) and dinner (Soir)"""

    def __init__(self):
        super().__init__(ScheduleBusinessType.RESTAURANT, 2, SlotType.MORNING)

    def _is_evening(self, slot: TimeSlot, position: int, count: int) -> bool:
        if count == 2:
            return position == 1
        return slot.start_time >= EVENING_STARTS_AT

    def default_label(self, slot, position, count):
        return "Soir" if self._is_evening(slot, position, count) else "Matin"

    def default_slot_type(self, slot, position, count):
        return SlotType.EVENING if self._is_evening(slot, position, count) else SlotType.MORNING


class CultureSlotPolicy(SlotPolicy):
    """A single slot covering the whole day"""

    def __init__(self):
        super().__init__(ScheduleBusinessType.CULTURE, 1, SlotType.ALL_DAY)

    def default_label(self, slot, position, count):
        return "Journée"


POLICIES: Dict[ScheduleBusinessType, SlotPolicy] = {
    ScheduleBusinessType.RESTAURANT: RestaurantSlotPolicy(),
    ScheduleBusinessType.CULTURE: CultureSlotPolicy(),
    ScheduleBusinessType.BIEN_ETRE: SlotPolicy(ScheduleBusinessType.BIEN_ETRE, None, SlotType.CUSTOM),
}


def get_slot_policy(business_type: Union[ScheduleBusinessType, str]) -> SlotPolicy:
    return POLICIES[ScheduleBusinessType(business_type)]
