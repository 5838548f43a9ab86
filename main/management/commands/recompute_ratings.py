"""
Management command to recompute denormalized product ratings.
"""
from uuid import UUID

from django.core.management.base import BaseCommand, CommandError

from main.domain.errors import NotFound
from main.infra.repositories import ProductRepository
from main.services import RatingAggregator


class Command(BaseCommand):
    help = 'Recompute product average ratings from the review store'

    def add_arguments(self, parser):
        parser.add_argument(
            '--product',
            action='append',
            type=UUID,
            default=[],
            help='Product id to recompute (repeatable); all products when omitted',
        )

    def handle(self, *args, **options):
        product_ids = options['product'] or ProductRepository().list_ids()
        aggregator = RatingAggregator()

        for product_id in product_ids:
            try:
                product = aggregator.recompute_rating(product_id)
            except NotFound as e:
                raise CommandError(e.message) from e
            self.stdout.write(f'{product_id}: {product.average_rating}')

        self.stdout.write(
            self.style.SUCCESS(f'Recomputed {len(product_ids)} ratings')
        )
