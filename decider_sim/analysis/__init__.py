from .occupancy import busy_fraction, delivery_by_sender, sense_answer_delays

__all__ = ["busy_fraction", "delivery_by_sender", "sense_answer_delays"]
