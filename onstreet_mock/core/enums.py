from enum import Enum


class VehicleType(str, Enum):
    CAR = "CAR"

    def __str__(self):
        return self.value


class ProductType(str, Enum):
    STANDARD = "STANDARD"

    def __str__(self):
        return self.value


class PaymentMethod(str, Enum):
    CASH = "CASH"
    BIZUM = "BIZUM"
    CARD = "CARD"

    def __str__(self):
        return self.value


class TicketEvent(str, Enum):
    PAID = "ticket.paid"

    def __str__(self):
        return self.value
