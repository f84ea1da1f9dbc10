"""
Accounts Views Tests
====================

Test Coverage:
1. Register / Login / Logout / Session
2. Preferences - auto-create and partial update

Run tests:
    python manage.py test apps.accounts.tests.test_views
"""

import json

from django.test import TestCase, Client
from django.urls import reverse
from django.contrib.auth import get_user_model

from apps.accounts.models import UserProfile

User = get_user_model()


class AuthViewsTest(TestCase):

    def setUp(self):
        self.client = Client()
        self.user = User.objects.create_user(
            email='owner@test.com', password='testpass123', first_name='Sara', last_name='Adel'
        )

    def post_json(self, url, data):
        return self.client.post(url, data=json.dumps(data), content_type='application/json')

    def test_register(self):
        response = self.post_json(reverse('accounts:register'), {
            'name': 'Omar Nabil Hassan',
            'email': 'Omar@Test.com',
            'password': 'secret1',
        })
        self.assertEqual(response.status_code, 201)

        user = User.objects.get(email='omar@test.com')
        self.assertEqual(user.first_name, 'Omar')
        self.assertEqual(user.last_name, 'Nabil Hassan')
        self.assertTrue(UserProfile.objects.filter(user=user).exists())

        # Registered users are logged in straight away
        response = self.client.get(reverse('accounts:session'))
        self.assertEqual(response.json()['user']['email'], 'omar@test.com')

    def test_register_duplicate_email(self):
        response = self.post_json(reverse('accounts:register'), {
            'name': 'Someone', 'email': 'OWNER@test.com', 'password': 'secret12',
        })
        self.assertEqual(response.status_code, 400)
        self.assertIn('email', response.json()['details'])

    def test_register_short_password(self):
        response = self.post_json(reverse('accounts:register'), {
            'name': 'Someone', 'email': 'new@test.com', 'password': '123',
        })
        self.assertEqual(response.status_code, 400)
        self.assertIn('password', response.json()['details'])

    def test_register_missing_name(self):
        response = self.post_json(reverse('accounts:register'), {'email': 'new@test.com', 'password': 'secret12'})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['details']['name'], ['Name is required'])

    def test_login(self):
        response = self.post_json(reverse('accounts:login'), {'email': 'OWNER@test.com', 'password': 'testpass123'})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['user']['name'], 'Sara Adel')

    def test_login_wrong_password(self):
        response = self.post_json(reverse('accounts:login'), {'email': 'owner@test.com', 'password': 'nope'})
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()['error'], 'Invalid email or password')

    def test_login_inactive_user(self):
        self.user.is_active = False
        self.user.save()
        response = self.post_json(reverse('accounts:login'), {'email': 'owner@test.com', 'password': 'testpass123'})
        self.assertEqual(response.status_code, 401)

    def test_login_remember(self):
        self.post_json(reverse('accounts:login'), {
            'email': 'owner@test.com', 'password': 'testpass123', 'remember': True,
        })
        self.assertEqual(self.client.session.get_expiry_age(), 30 * 24 * 60 * 60)

    def test_session_anonymous(self):
        response = self.client.get(reverse('accounts:session'))
        self.assertEqual(response.status_code, 401)

    def test_logout(self):
        self.client.login(email='owner@test.com', password='testpass123')
        response = self.client.post(reverse('accounts:logout'))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(self.client.get(reverse('accounts:session')).status_code, 401)


class PreferencesViewTest(TestCase):

    def setUp(self):
        self.client = Client()
        self.user = User.objects.create_user(email='owner@test.com', password='testpass123')
        self.client.login(email='owner@test.com', password='testpass123')
        self.url = reverse('accounts:preferences')

    def put_json(self, data):
        return self.client.put(self.url, data=json.dumps(data), content_type='application/json')

    def test_get_creates_missing_profile(self):
        UserProfile.objects.filter(user=self.user).delete()

        response = self.client.get(self.url)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {'theme': 'system', 'timezone': 'UTC', 'preferences': {}})
        self.assertTrue(UserProfile.objects.filter(user=self.user).exists())

    def test_partial_update(self):
        self.put_json({'timezone': 'Africa/Cairo', 'preferences': {'compact': True}})

        response = self.put_json({'theme': 'dark'})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {
            'theme': 'dark', 'timezone': 'Africa/Cairo', 'preferences': {'compact': True},
        })

    def test_invalid_theme(self):
        response = self.put_json({'theme': 'neon'})
        self.assertEqual(response.status_code, 400)
        self.assertIn('theme', response.json()['details'])

    def test_invalid_timezone(self):
        response = self.put_json({'timezone': 'Mars/Olympus'})
        self.assertEqual(response.status_code, 400)
        self.assertIn('timezone', response.json()['details'])

    def test_requires_login(self):
        self.client.logout()
        self.assertEqual(self.client.get(self.url).status_code, 401)
