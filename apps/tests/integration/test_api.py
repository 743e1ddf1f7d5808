"""
Integration tests for the API endpoints.

This module tests the HTTP surface with the Cloudinary storage service
patched out:
- Listing videos
- Composing overlay videos (success and each failure stage)
- Request validation
- Health checks
"""

from unittest.mock import patch

from django.test import override_settings
from rest_framework import status
from rest_framework.test import APIClient, APISimpleTestCase

from apps.compositions.exceptions import UpstreamError
from apps.compositions.services.cloudinary_storage import (
    CloudinaryStorageService,
    MediaAsset,
)

STORAGE = 'apps.compositions.services.cloudinary_storage.CloudinaryStorageService'

COMPOSITION_SETTINGS = {
    'FOREGROUND_PATH': '/srv/videos/foreground.mp4',
    'BACKGROUND_PATH': '/srv/videos/background.mp4',
    'CHROMA_KEY_COLOR': '#6adb47',
    'TARGET_WIDTH': 500,
    'OVERLAY_SCALE': 0.6,
    'TRANSPARENCY_TOLERANCE': 20,
    'GRAVITY': 'north',
    'OUTPUT_DURATION': 15.0,
    'CLEANUP_FAILURE_IS_FATAL': True,
}


# =============================================================================
# Test Fixtures and Helpers
# =============================================================================

def make_asset(public_id: str, **payload) -> MediaAsset:
    payload.setdefault('public_id', public_id)
    return MediaAsset(public_id=public_id, payload=payload)


FOREGROUND = make_asset('fg123')
BACKGROUND = make_asset(
    'chroma-key-overlays/bg456',
    width=500,
    height=281,
    duration=15.0,
    secure_url='https://res.cloudinary.com/demo/video/upload/chroma-key-overlays/bg456.mp4',
)


# =============================================================================
# Base Test Class
# =============================================================================

@override_settings(COMPOSITION=COMPOSITION_SETTINGS)
class APITestBase(APISimpleTestCase):
    """Base class for API tests with common setup."""

    url = '/api/videos'

    def setUp(self):
        self.client = APIClient()


# =============================================================================
# Listing Tests
# =============================================================================

class TestListVideosEndpoint(APITestBase):
    """Tests for GET /api/videos."""

    @patch(f'{STORAGE}.list_assets')
    def test_list_returns_assets_unchanged(self, mock_list):
        mock_list.return_value = [make_asset('b', bytes=2), make_asset('a', bytes=1)]

        response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        data = response.json()
        self.assertTrue(data['success'])
        self.assertEqual(
            data['result'],
            [{'public_id': 'b', 'bytes': 2}, {'public_id': 'a', 'bytes': 1}],
        )

    @patch(f'{STORAGE}.list_assets')
    def test_list_accepts_trailing_slash(self, mock_list):
        mock_list.return_value = []

        response = self.client.get('/api/videos/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.json()['result'], [])

    @patch(f'{STORAGE}.list_assets')
    def test_list_ignores_invalid_composition_settings(self, mock_list):
        mock_list.return_value = [make_asset('a')]

        with self.settings(COMPOSITION={**COMPOSITION_SETTINGS, 'GRAVITY': 'top'}):
            response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.json()['result'], [{'public_id': 'a'}])

    @patch(f'{STORAGE}.list_assets')
    def test_list_without_composition_settings(self, mock_list):
        mock_list.return_value = []

        with self.settings(COMPOSITION={}):
            response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)

    @patch(f'{STORAGE}.list_assets')
    def test_list_failure_uses_upstream_status(self, mock_list):
        mock_list.side_effect = UpstreamError('list', 'chroma-key-overlays', 'Invalid api_key', 401)

        response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        data = response.json()
        self.assertFalse(data['success'])
        self.assertEqual(data['error']['code'], 'UPSTREAM_ERROR')
        self.assertEqual(data['error']['details']['stage'], 'list_assets')
        self.assertEqual(data['error']['details']['status_code'], 401)

    @patch(f'{STORAGE}.list_assets')
    def test_list_failure_without_status_is_400(self, mock_list):
        mock_list.side_effect = UpstreamError('list', 'chroma-key-overlays', 'connection reset')

        response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('connection reset', response.json()['error']['message'])


# =============================================================================
# Composition Tests
# =============================================================================

class TestComposeVideoEndpoint(APITestBase):
    """Tests for POST /api/videos."""

    @patch(f'{STORAGE}.delete')
    @patch(f'{STORAGE}.upload')
    def test_compose_returns_background_descriptor(self, mock_upload, mock_delete):
        mock_upload.side_effect = [FOREGROUND, BACKGROUND]
        mock_delete.return_value = {'fg123': 'deleted'}

        response = self.client.post(self.url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        data = response.json()
        self.assertTrue(data['success'])
        self.assertEqual(data['result'], BACKGROUND.payload)
        self.assertNotIn('warnings', data)
        mock_delete.assert_called_once_with(['fg123'])

    @patch(f'{STORAGE}.delete')
    @patch(f'{STORAGE}.upload')
    def test_compose_uses_configured_paths(self, mock_upload, mock_delete):
        mock_upload.side_effect = [FOREGROUND, BACKGROUND]

        self.client.post(self.url)

        first, second = mock_upload.call_args_list
        self.assertEqual(first.args, ('/srv/videos/foreground.mp4',))
        self.assertFalse(first.kwargs['folder'])
        self.assertEqual(second.args, ('/srv/videos/background.mp4',))
        self.assertTrue(second.kwargs['folder'])
        self.assertEqual(second.kwargs['transformation'][1], {'overlay': 'video:fg123'})
        self.assertEqual(second.kwargs['transformation'][3]['color'], '#6adb47')

    @patch(f'{STORAGE}.delete')
    @patch(f'{STORAGE}.upload')
    def test_compose_with_color_override(self, mock_upload, mock_delete):
        mock_upload.side_effect = [FOREGROUND, BACKGROUND]

        response = self.client.post(self.url, {'chroma_key_color': '#00ff00'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        pipeline = mock_upload.call_args_list[1].kwargs['transformation']
        self.assertEqual(pipeline[3], {'color': '#00ff00', 'effect': 'make_transparent:20'})

    @patch(f'{STORAGE}.upload')
    def test_compose_rejects_invalid_color(self, mock_upload):
        response = self.client.post(self.url, {'chroma_key_color': 'rgb(0,255,0)'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        data = response.json()
        self.assertEqual(data['error']['code'], 'VALIDATION_ERROR')
        self.assertEqual(data['error']['errors'][0]['field'], 'chroma_key_color')
        mock_upload.assert_not_called()

    @patch(f'{STORAGE}.delete')
    @patch(f'{STORAGE}.upload')
    def test_foreground_failure(self, mock_upload, mock_delete):
        mock_upload.side_effect = UpstreamError(
            'upload', '/srv/videos/foreground.mp4', 'Source file does not exist'
        )

        response = self.client.post(self.url)

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.json()['error']['details']['stage'], 'upload_foreground')
        self.assertEqual(mock_upload.call_count, 1)
        mock_delete.assert_not_called()

    @patch(f'{STORAGE}.delete')
    @patch(f'{STORAGE}.upload')
    def test_background_failure_does_not_delete_foreground(self, mock_upload, mock_delete):
        mock_upload.side_effect = [
            FOREGROUND,
            UpstreamError('upload', '/srv/videos/background.mp4', 'Server error', 500),
        ]

        response = self.client.post(self.url)

        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(response.json()['error']['details']['stage'], 'upload_background')
        mock_delete.assert_not_called()

    @patch(f'{STORAGE}.delete')
    @patch(f'{STORAGE}.upload')
    def test_cleanup_failure_discards_result(self, mock_upload, mock_delete):
        mock_upload.side_effect = [FOREGROUND, BACKGROUND]
        mock_delete.side_effect = UpstreamError('delete', 'fg123', 'Rate limit exceeded', 420)

        response = self.client.post(self.url)

        self.assertEqual(response.status_code, 420)
        data = response.json()
        self.assertNotIn('result', data)
        self.assertEqual(data['error']['details']['stage'], 'cleanup_foreground')

    @patch(f'{STORAGE}.delete')
    @patch(f'{STORAGE}.upload')
    def test_cleanup_failure_as_warning(self, mock_upload, mock_delete):
        mock_upload.side_effect = [FOREGROUND, BACKGROUND]
        mock_delete.side_effect = UpstreamError('delete', 'fg123', 'Rate limit exceeded', 420)

        with self.settings(COMPOSITION={**COMPOSITION_SETTINGS, 'CLEANUP_FAILURE_IS_FATAL': False}):
            response = self.client.post(self.url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        data = response.json()
        self.assertEqual(data['result'], BACKGROUND.payload)
        self.assertEqual(len(data['warnings']), 1)

    @patch(f'{STORAGE}.upload')
    def test_invalid_configuration_is_500(self, mock_upload):
        with self.settings(COMPOSITION={**COMPOSITION_SETTINGS, 'OVERLAY_SCALE': 3}):
            response = self.client.post(self.url)

        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(response.json()['error']['code'], 'INVALID_COMPOSITION_CONFIG')
        mock_upload.assert_not_called()

    def test_unsupported_method(self):
        response = self.client.delete(self.url)

        self.assertEqual(response.status_code, status.HTTP_405_METHOD_NOT_ALLOWED)
        self.assertFalse(response.json()['success'])


# =============================================================================
# Health Check Tests
# =============================================================================

class TestHealthCheckEndpoint(APITestBase):
    """Tests for the health check endpoint."""

    @patch.object(CloudinaryStorageService, 'check_connection')
    def test_healthy(self, mock_check):
        mock_check.return_value = (True, "Cloudinary connection OK")

        response = self.client.get('/api/health')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        data = response.json()
        self.assertEqual(data['status'], 'healthy')
        self.assertIn('timestamp', data)
        self.assertEqual(data['components']['cloudinary']['status'], 'healthy')

    @patch.object(CloudinaryStorageService, 'check_connection')
    def test_degraded(self, mock_check):
        mock_check.return_value = (False, "Cloudinary cloud name not configured")

        response = self.client.get('/api/health/')

        self.assertEqual(response.status_code, status.HTTP_503_SERVICE_UNAVAILABLE)
        self.assertEqual(response.json()['status'], 'degraded')
