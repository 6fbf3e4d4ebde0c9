"""Bootstrap data written by initLedger."""

from __future__ import annotations

from pyfabcar.keys import seed_key
from pyfabcar.models.car import Car

SEED_CARS: tuple[Car, ...] = (
    Car(make="Toyota", model="Prius", colour="blue", owner="Tomoko"),
    Car(make="Ford", model="Mustang", colour="red", owner="Brad"),
    Car(make="Hyundai", model="Tucson", colour="green", owner="Jin Soo"),
    Car(make="Volkswagen", model="Passat", colour="yellow", owner="Max"),
    Car(make="Tesla", model="S", colour="black", owner="Adriana"),
    Car(make="Peugeot", model="205", colour="purple", owner="Michel"),
    Car(make="Chery", model="S22L", colour="white", owner="Aarav"),
    Car(make="Fiat", model="Punto", colour="violet", owner="Pari"),
    Car(make="Tata", model="Nano", colour="indigo", owner="Valeria"),
    Car(make="Holden", model="Barina", colour="brown", owner="Shotaro"),
)


def seed_entries() -> list[tuple[str, Car]]:
    """Seed records paired with their keys, in ascending index order."""
    return [(seed_key(index), car) for index, car in enumerate(SEED_CARS)]
