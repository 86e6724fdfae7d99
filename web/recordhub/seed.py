"""
Seed the database with generated articles or employees.

Records are inserted through the models' bulk create path in batches no
larger than the bulk cap, so generated data passes the same validation as
API input.
"""
import argparse
import logging
import random
import sys
from typing import Any, Dict, Iterator, List

from .config import Config
from .model import ArticleModel, Database, EmployeeModel
from .model.validation import ARTICLE_UNITS, DEPARTMENTS

logger = logging.getLogger(__name__)

PRODUCT_CATEGORIES = {
    'Electronics': ['Smartphone', 'Laptop', 'Monitor', 'Keyboard', 'Mouse', 'Headphones',
                    'Router', 'Cable', 'Charger', 'USB Drive', 'SSD'],
    'Office Supplies': ['Pen', 'Notebook', 'Binder', 'Paper', 'Stapler', 'Marker',
                        'Folder', 'Envelope', 'Sticky Notes', 'Toner'],
    'Home & Garden': ['Lamp', 'Rug', 'Pillow', 'Vase', 'Mirror', 'Plant Pot', 'Hose',
                      'Watering Can'],
    'Tools & Hardware': ['Hammer', 'Screwdriver', 'Wrench', 'Drill', 'Saw', 'Screws',
                         'Nails', 'Light Bulb', 'Paint'],
    'Food & Beverage': ['Coffee', 'Tea', 'Sugar', 'Rice', 'Flour', 'Juice', 'Water'],
}

ADJECTIVES = ['Premium', 'Basic', 'Professional', 'Compact', 'Heavy Duty', 'Eco', 'Deluxe']

FIRST_NAMES = ['Anna', 'Ben', 'Clara', 'David', 'Emma', 'Felix', 'Greta', 'Hugo', 'Ida',
               'Jonas', 'Karin', 'Lars', 'Maja', 'Nils', 'Olivia', 'Peter']
LAST_NAMES = ['Andersson', 'Berg', 'Carlsson', 'Dahl', 'Eriksson', 'Fors', 'Holm',
              'Lund', 'Nilsson', 'Strand']
JOB_TITLES = ['Software Engineer', 'Developer', 'Marketing Manager', 'Sales Representative',
              'HR Manager', 'Accountant', 'Operations Manager', 'Support Specialist',
              'IT Specialist', 'Analyst', 'Designer']


def generate_articles(count: int, start_number: int = 1,
                      rng: random.Random = None) -> Iterator[Dict[str, Any]]:
    """Yield ``count`` article payloads numbered from ``start_number``."""
    rng = rng or random.Random()
    for offset in range(count):
        category = rng.choice(list(PRODUCT_CATEGORIES))
        item = rng.choice(PRODUCT_CATEGORIES[category])
        purchase_price = round(rng.uniform(0.5, 800), 2)
        yield {
            'articleNumber': start_number + offset,
            'articleName': f"{rng.choice(ADJECTIVES)} {item}",
            'unit': rng.choice(ARTICLE_UNITS),
            'packageSize': rng.randint(1, 50),
            'purchasePrice': purchase_price,
            'salesPrice': round(purchase_price * rng.uniform(1.05, 1.8), 2),
            'category': category,
        }


def generate_employees(count: int, rng: random.Random = None) -> Iterator[Dict[str, Any]]:
    """Yield ``count`` employee payloads with unique emails."""
    rng = rng or random.Random()
    for index in range(count):
        first, last = rng.choice(FIRST_NAMES), rng.choice(LAST_NAMES)
        job = rng.choice(JOB_TITLES)
        employee = {
            'name': f"{first} {last}",
            'email': f"{first}.{last}.{index}@example.com".lower(),
            'phone': f"+46 70 {rng.randint(100, 999)} {rng.randint(1000, 9999)}",
            'job': job,
        }
        if job == 'Analyst':
            employee['department'] = rng.choice(DEPARTMENTS)
        yield employee


def _batches(items: Iterator[Dict[str, Any]], size: int) -> Iterator[List[Dict[str, Any]]]:
    batch = []
    for item in items:
        batch.append(item)
        if len(batch) == size:
            yield batch
            batch = []
    if batch:
        yield batch


def seed(kind: str, count: int, start_number: int = 1, seed_value: int = None) -> Dict[str, int]:
    """
    Insert generated records of one kind.

    Args:
        kind: "articles" or "employees"
        count: Number of records to generate
        start_number: First article number (articles only)
        seed_value: Random seed for reproducible data

    Returns:
        Created and failed totals
    """
    rng = random.Random(seed_value)
    if kind == 'articles':
        model = ArticleModel()
        payloads = generate_articles(count, start_number, rng)
    elif kind == 'employees':
        model = EmployeeModel()
        payloads = generate_employees(count, rng)
    else:
        raise ValueError(f"Unknown record kind: {kind}")

    totals = {'created': 0, 'failed': 0}
    for batch in _batches(payloads, model.bulk_create_limit):
        result = model.bulk_create(batch)
        totals['created'] += result.succeeded_count
        totals['failed'] += result.failed_count
        logger.info(f"Seeded {totals['created']}/{count} {kind}")
    return totals


def main(argv=None):
    """Command line entry point."""
    parser = argparse.ArgumentParser(description='Seed the record database with generated data')
    parser.add_argument('kind', choices=['articles', 'employees'], help='Record kind to generate')
    parser.add_argument('--count', type=int, default=1000, help='Number of records (default: 1000)')
    parser.add_argument('--start-number', type=int, default=1,
                        help='First article number (default: 1)')
    parser.add_argument('--seed', type=int, default=None, help='Random seed')
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable debug logging')
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler(sys.stdout)]
    )

    Database().connect(Config.MONGODB_URI, Config.DATABASE_NAME, Config.MONGODB_TIMEOUT_MS)
    try:
        totals = seed(args.kind, args.count, args.start_number, args.seed)
    finally:
        Database().close()

    logger.info(f"Done: {totals['created']} created, {totals['failed']} failed")
    return 0 if totals['failed'] == 0 else 1


if __name__ == '__main__':
    sys.exit(main())
