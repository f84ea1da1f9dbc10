"""
Contact Views Tests
===================

Test Coverage:
1. Collection View - list, filters, pagination, create
2. Detail View - get, partial update, delete, owner scoping
3. Export View - excel and csv

Run tests:
    python manage.py test apps.contacts.tests.test_views
"""

import json

from django.test import TestCase, Client
from django.urls import reverse
from django.contrib.auth import get_user_model

from apps.contacts.models import Contact

User = get_user_model()


class ContactCollectionViewTest(TestCase):
    """Test contact list and create"""

    def setUp(self):
        self.client = Client()
        self.user = User.objects.create_user(email='owner@test.com', password='testpass123')
        self.other = User.objects.create_user(email='other@test.com', password='testpass123')

        self.sara = Contact.objects.create(user=self.user, name='Sara Adel', email='sara@acme.com', company='Acme')
        self.sara.tags.add('vip')
        Contact.objects.create(user=self.user, name='Omar Nabil', company='Globex')
        Contact.objects.create(user=self.other, name='Sara Hidden', company='Acme')

        self.client.login(email='owner@test.com', password='testpass123')
        self.url = reverse('contacts:contact_list')

    def test_requires_login(self):
        """Anonymous callers get 401 JSON"""
        self.client.logout()
        response = self.client.get(self.url)
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json()['error'], 'Unauthorized')

    def test_list_only_own_contacts(self):
        response = self.client.get(self.url)
        self.assertEqual(response.status_code, 200)

        data = response.json()
        names = {c['name'] for c in data['contacts']}
        self.assertEqual(names, {'Sara Adel', 'Omar Nabil'})
        self.assertEqual(data['pagination']['total'], 2)

    def test_list_includes_counts(self):
        response = self.client.get(self.url)
        contact = next(c for c in response.json()['contacts'] if c['name'] == 'Sara Adel')
        self.assertEqual(contact['counts'], {'opportunities': 0, 'communications': 0, 'documents': 0})
        self.assertEqual(contact['tags'], ['vip'])

    def test_query_filter(self):
        response = self.client.get(self.url, {'query': 'sara'})
        names = [c['name'] for c in response.json()['contacts']]
        self.assertEqual(names, ['Sara Adel'])

    def test_company_and_tag_filters(self):
        response = self.client.get(self.url, {'company': 'globex'})
        self.assertEqual([c['name'] for c in response.json()['contacts']], ['Omar Nabil'])

        response = self.client.get(self.url, {'tag': 'VIP'})
        self.assertEqual([c['name'] for c in response.json()['contacts']], ['Sara Adel'])

    def test_pagination(self):
        response = self.client.get(self.url, {'limit': 1, 'page': 2})
        data = response.json()
        self.assertEqual(len(data['contacts']), 1)
        self.assertEqual(data['pagination'], {'page': 2, 'limit': 1, 'total': 2, 'total_pages': 2})

    def test_invalid_pagination(self):
        response = self.client.get(self.url, {'limit': 'abc'})
        self.assertEqual(response.status_code, 400)

    def test_create_contact(self):
        response = self.client.post(
            self.url,
            data=json.dumps({'name': 'New Person', 'email': 'NEW@Example.com', 'tags': ['lead', 'retail']}),
            content_type='application/json'
        )
        self.assertEqual(response.status_code, 201)

        data = response.json()
        self.assertEqual(data['email'], 'new@example.com')
        self.assertEqual(data['tags'], ['lead', 'retail'])

        contact = Contact.objects.get(pk=data['id'])
        self.assertEqual(contact.user, self.user)

    def test_create_requires_name(self):
        response = self.client.post(
            self.url,
            data=json.dumps({'email': 'x@example.com'}),
            content_type='application/json'
        )
        self.assertEqual(response.status_code, 400)
        self.assertIn('name', response.json()['details'])

    def test_create_rejects_bad_json(self):
        response = self.client.post(self.url, data='{not json', content_type='application/json')
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['error'], 'Invalid JSON format')

    def test_method_not_allowed(self):
        response = self.client.delete(self.url)
        self.assertEqual(response.status_code, 405)


class ContactDetailViewTest(TestCase):
    """Test get, update and delete of one contact"""

    def setUp(self):
        self.client = Client()
        self.user = User.objects.create_user(email='owner@test.com', password='testpass123')
        self.other = User.objects.create_user(email='other@test.com', password='testpass123')

        self.contact = Contact.objects.create(
            user=self.user, name='Sara Adel', email='sara@acme.com', phone='+201000000000', company='Acme'
        )
        self.foreign = Contact.objects.create(user=self.other, name='Not Yours')

        self.client.login(email='owner@test.com', password='testpass123')

    def url(self, contact):
        return reverse('contacts:contact_detail', args=[contact.pk])

    def test_get_detail(self):
        response = self.client.get(self.url(self.contact))
        self.assertEqual(response.status_code, 200)

        data = response.json()
        self.assertEqual(data['name'], 'Sara Adel')
        self.assertEqual(data['opportunities'], [])
        self.assertEqual(data['communications'], [])

    def test_other_users_contact_is_not_found(self):
        response = self.client.get(self.url(self.foreign))
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()['error'], 'Contact not found')

    def test_partial_update_keeps_other_fields(self):
        response = self.client.put(
            self.url(self.contact),
            data=json.dumps({'title': 'Buyer'}),
            content_type='application/json'
        )
        self.assertEqual(response.status_code, 200)

        self.contact.refresh_from_db()
        self.assertEqual(self.contact.title, 'Buyer')
        self.assertEqual(self.contact.email, 'sara@acme.com')
        self.assertEqual(self.contact.phone, '+201000000000')

    def test_update_tags(self):
        response = self.client.put(
            self.url(self.contact),
            data=json.dumps({'tags': 'hot, retail'}),
            content_type='application/json'
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['tags'], ['hot', 'retail'])

    def test_update_rejects_bad_email(self):
        response = self.client.put(
            self.url(self.contact),
            data=json.dumps({'email': 'not-an-email'}),
            content_type='application/json'
        )
        self.assertEqual(response.status_code, 400)
        self.assertIn('email', response.json()['details'])

    def test_delete(self):
        response = self.client.delete(self.url(self.contact))
        self.assertEqual(response.status_code, 200)
        self.assertFalse(Contact.objects.filter(pk=self.contact.pk).exists())

    def test_cannot_delete_other_users_contact(self):
        response = self.client.delete(self.url(self.foreign))
        self.assertEqual(response.status_code, 404)
        self.assertTrue(Contact.objects.filter(pk=self.foreign.pk).exists())


class ContactExportViewTest(TestCase):
    """Test spreadsheet export"""

    def setUp(self):
        self.client = Client()
        self.user = User.objects.create_user(email='owner@test.com', password='testpass123')
        Contact.objects.create(user=self.user, name='Sara Adel', company='Acme')
        self.client.login(email='owner@test.com', password='testpass123')
        self.url = reverse('contacts:contact_export')

    def test_export_excel(self):
        response = self.client.get(self.url, {'format': 'excel'})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            response['Content-Type'],
            'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'
        )
        self.assertIn('.xlsx', response['Content-Disposition'])

    def test_export_csv(self):
        response = self.client.get(self.url, {'format': 'csv'})
        self.assertEqual(response.status_code, 200)
        content = response.content.decode('utf-8-sig')
        self.assertIn('Sara Adel', content)
        self.assertIn('Acme', content)

    def test_invalid_format(self):
        response = self.client.get(self.url, {'format': 'pdf'})
        self.assertEqual(response.status_code, 400)
