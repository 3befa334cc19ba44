"""
API tests for the NIC decode endpoint
"""

from datetime import date
from unittest.mock import patch

from django.core.cache import cache
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase


@patch('django.utils.timezone.localdate', return_value=date(2024, 1, 1))
class NicDecodeAPITest(APITestCase):
    def setUp(self):
        cache.clear()
        self.url = reverse('nic:decode')

    def test_decode_old_format_get(self, mock_localdate):
        """
        Ensure an old NIC can be decoded through a query parameter.
        """
        response = self.client.get(self.url, {'nic': '996663272V'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['nic'], '996663272V')
        self.assertEqual(response.data['format'], 'old')
        self.assertEqual(response.data['birth_year'], 1999)
        self.assertEqual(response.data['day_of_year'], 166)
        self.assertEqual(response.data['birth_date'], '1999-06-15')
        self.assertEqual(response.data['birth_date_display'], 'June 15, 1999')
        self.assertEqual(response.data['sex'], 'female')
        self.assertEqual(response.data['sex_display'], 'Female')
        self.assertEqual(response.data['age'], 24)

    def test_decode_new_format_post(self, mock_localdate):
        """
        Ensure a new NIC can be decoded from a JSON body.
        """
        response = self.client.post(self.url, {'nic': '197419202757'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['format'], 'new')
        self.assertEqual(response.data['birth_date'], '1974-07-11')
        self.assertEqual(response.data['sex'], 'male')
        self.assertEqual(response.data['age'], 49)
        self.assertEqual(response.data['explanation']['day_field'], '192')

    def test_surrounding_whitespace_is_trimmed(self, mock_localdate):
        response = self.client.post(self.url, {'nic': ' 996663272v '}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['nic'], '996663272V')

    def test_invalid_format(self, mock_localdate):
        """
        Ensure malformed input returns the rejection and no decoded fields.
        """
        response = self.client.get(self.url, {'nic': '12345'})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['code'], 'invalid_format')
        self.assertIn('valid NIC number', response.data['nic'][0])
        self.assertNotIn('birth_date', response.data)

    def test_invalid_day_of_year(self, mock_localdate):
        response = self.client.post(self.url, {'nic': '000000000V'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['code'], 'invalid_day_of_year')

    def test_missing_nic(self, mock_localdate):
        response = self.client.post(self.url, {}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['code'], 'required')

    def test_non_object_body(self, mock_localdate):
        """
        Ensure a JSON body that is not an object is a 400, not a server error.
        """
        response = self.client.post(self.url, ['996663272V'], format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['code'], 'invalid_format')
        self.assertIn('non_field_errors', response.data)

    def test_health(self, mock_localdate):
        response = self.client.get(reverse('nic:health'))
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, {'status': 'ok'})
