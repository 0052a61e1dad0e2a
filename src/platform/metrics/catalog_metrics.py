from typing import Iterable

from prometheus_client import Counter, Histogram


class CatalogMetrics:
    """
    Catalog Service Metrics Collector

    Tracks the image pipeline, the only CPU-heavy part of the service.
    """

    def __init__(self):
        # ========== Thumbnail Pipeline Metrics ==========
        self.thumbnails_generated = Counter(
            'catalog_thumbnails_generated_total',
            'Thumbnails generated',
            ['size', 'context'],  # context: upload/write/backfill
        )

        self.thumbnail_failures = Counter(
            'catalog_thumbnail_failures_total',
            'Source images that could not be decoded',
            ['context'],
        )

        self.thumbnail_duration = Histogram(
            'catalog_thumbnail_duration_seconds',
            'Decode + resize + encode time for one source image',
            ['context'],
            buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5],
        )

        # ========== Gallery Upload Metrics ==========
        self.gallery_files_skipped = Counter(
            'catalog_gallery_files_skipped_total',
            'Uploaded gallery files that were not stored',
            ['reason'],  # reason: disallowed_type/decode_error
        )

    # ========== Helper Methods ==========

    def record_thumbnails(self, *, sizes: Iterable[str], context: str, duration: float):
        for size in sizes:
            self.thumbnails_generated.labels(size=size, context=context).inc()
        self.thumbnail_duration.labels(context=context).observe(duration)

    def record_thumbnail_failure(self, *, context: str):
        self.thumbnail_failures.labels(context=context).inc()

    def record_gallery_skip(self, *, reason: str):
        self.gallery_files_skipped.labels(reason=reason).inc()


# Global metrics instance
metrics = CatalogMetrics()
