"""
Opportunity Views Tests
=======================

Test Coverage:
1. Collection View - board, stats, filters, create
2. Detail View - get, partial update with stage bookkeeping, delete
3. Reorder View - drag & drop moves

Run tests:
    python manage.py test apps.opportunities.tests.test_views
"""

import json
from decimal import Decimal

from django.test import TestCase, Client
from django.urls import reverse
from django.contrib.auth import get_user_model

from apps.contacts.models import Contact
from apps.opportunities.models import Opportunity

User = get_user_model()


class OpportunityViewTestCase(TestCase):

    def setUp(self):
        self.client = Client()
        self.user = User.objects.create_user(email='owner@test.com', password='testpass123')
        self.other = User.objects.create_user(email='other@test.com', password='testpass123')
        self.contact = Contact.objects.create(user=self.user, name='Sara Adel', company='Acme')
        self.foreign_contact = Contact.objects.create(user=self.other, name='Hidden')
        self.client.login(email='owner@test.com', password='testpass123')

    def post_json(self, url, data):
        return self.client.post(url, data=json.dumps(data), content_type='application/json')

    def put_json(self, url, data):
        return self.client.put(url, data=json.dumps(data), content_type='application/json')


class OpportunityCollectionViewTest(OpportunityViewTestCase):

    def setUp(self):
        super().setUp()
        self.url = reverse('opportunities:opportunity_list')

    def test_requires_login(self):
        self.client.logout()
        self.assertEqual(self.client.get(self.url).status_code, 401)

    def test_board_and_stats(self):
        Opportunity.objects.create(user=self.user, title='A', value=Decimal('1000'))
        Opportunity.objects.create(user=self.user, title='B', value=Decimal('2000'), status='closed-won')
        Opportunity.objects.create(user=self.other, title='Not mine')

        response = self.client.get(self.url)
        self.assertEqual(response.status_code, 200)

        data = response.json()
        self.assertEqual(len(data['opportunities']), 2)
        self.assertEqual([o['title'] for o in data['kanban']['lead']], ['A'])
        self.assertEqual([o['title'] for o in data['kanban']['closed-won']], ['B'])
        self.assertEqual(data['stats']['won_value'], 2000)
        self.assertEqual(data['stats']['win_rate'], 100.0)

    def test_filters_do_not_change_stats(self):
        Opportunity.objects.create(user=self.user, title='Website', value=Decimal('100'))
        Opportunity.objects.create(user=self.user, title='Logo', value=Decimal('300'))

        data = self.client.get(self.url, {'query': 'web'}).json()
        self.assertEqual(len(data['opportunities']), 1)
        self.assertEqual(data['stats']['total'], 2)
        self.assertEqual(data['stats']['total_value'], 400)

    def test_invalid_status_filter(self):
        response = self.client.get(self.url, {'status': 'archived'})
        self.assertEqual(response.status_code, 400)

    def test_create_with_defaults(self):
        response = self.post_json(self.url, {'title': 'New deal', 'contact': self.contact.id, 'value': 1500})
        self.assertEqual(response.status_code, 201)

        data = response.json()
        self.assertEqual(data['status'], 'lead')
        self.assertEqual(data['probability'], 10)
        self.assertEqual(data['currency'], 'USD')
        self.assertEqual(data['value'], 1500.0)
        self.assertEqual(data['formatted_value'], '$1,500.00')
        self.assertEqual(data['contact']['name'], 'Sara Adel')

    def test_create_closed_won_forces_probability(self):
        response = self.post_json(self.url, {'title': 'Done deal', 'status': 'closed-won', 'probability': 40})
        self.assertEqual(response.status_code, 201)

        data = response.json()
        self.assertEqual(data['probability'], 100)
        self.assertIsNotNone(data['won_date'])
        self.assertIsNotNone(data['actual_close_date'])

    def test_create_rejects_foreign_contact(self):
        response = self.post_json(self.url, {'title': 'Deal', 'contact': self.foreign_contact.id})
        self.assertEqual(response.status_code, 400)
        self.assertIn('contact', response.json()['details'])

    def test_create_rejects_non_positive_value(self):
        response = self.post_json(self.url, {'title': 'Deal', 'value': 0})
        self.assertEqual(response.status_code, 400)
        self.assertIn('value', response.json()['details'])

    def test_create_rejects_probability_out_of_range(self):
        response = self.post_json(self.url, {'title': 'Deal', 'probability': 150})
        self.assertEqual(response.status_code, 400)
        self.assertIn('probability', response.json()['details'])

    def test_create_requires_title(self):
        response = self.post_json(self.url, {'value': 100})
        self.assertEqual(response.status_code, 400)
        self.assertIn('title', response.json()['details'])


class OpportunityDetailViewTest(OpportunityViewTestCase):

    def setUp(self):
        super().setUp()
        self.opportunity = Opportunity.objects.create(
            user=self.user, title='Deal', value=Decimal('800'), probability=30, contact=self.contact
        )
        self.url = reverse('opportunities:opportunity_detail', args=[self.opportunity.pk])

    def test_get(self):
        response = self.client.get(self.url)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['title'], 'Deal')
        self.assertEqual(response.json()['communications'], [])

    def test_other_user_gets_not_found(self):
        self.client.logout()
        self.client.login(email='other@test.com', password='testpass123')
        self.assertEqual(self.client.get(self.url).status_code, 404)

    def test_partial_update(self):
        response = self.put_json(self.url, {'probability': 60, 'tags': ['priority']})
        self.assertEqual(response.status_code, 200)

        self.opportunity.refresh_from_db()
        self.assertEqual(self.opportunity.probability, 60)
        self.assertEqual(self.opportunity.title, 'Deal')
        self.assertEqual(self.opportunity.contact, self.contact)
        self.assertEqual(list(self.opportunity.tags.names()), ['priority'])

    def test_update_to_closed_lost(self):
        response = self.put_json(self.url, {'status': 'closed-lost'})
        self.assertEqual(response.status_code, 200)

        data = response.json()
        self.assertEqual(data['probability'], 0)
        self.assertEqual(data['lost_reason'], 'Not specified')

    def test_delete_keeps_contact(self):
        response = self.client.delete(self.url)
        self.assertEqual(response.status_code, 200)
        self.assertFalse(Opportunity.objects.filter(pk=self.opportunity.pk).exists())
        self.assertTrue(Contact.objects.filter(pk=self.contact.pk).exists())

    def test_deleting_contact_nulls_reference(self):
        self.contact.delete()
        self.opportunity.refresh_from_db()
        self.assertIsNone(self.opportunity.contact)


class OpportunityReorderViewTest(OpportunityViewTestCase):

    def setUp(self):
        super().setUp()
        self.opportunity = Opportunity.objects.create(user=self.user, title='Deal')
        self.url = reverse('opportunities:opportunity_reorder')

    def test_move(self):
        response = self.post_json(self.url, {
            'opportunity_id': self.opportunity.id,
            'new_status': 'closed-won',
            'new_order': 0,
        })
        self.assertEqual(response.status_code, 200)

        data = response.json()
        self.assertEqual(data['status'], 'closed-won')
        self.assertEqual(data['probability'], 100)
        self.assertIsNotNone(data['won_date'])

    def test_missing_fields(self):
        response = self.post_json(self.url, {'opportunity_id': self.opportunity.id})
        self.assertEqual(response.status_code, 400)
        self.assertIn('new_status', response.json()['details'])
        self.assertIn('new_order', response.json()['details'])

    def test_invalid_status(self):
        response = self.post_json(self.url, {
            'opportunity_id': self.opportunity.id,
            'new_status': 'won',
            'new_order': 0,
        })
        self.assertEqual(response.status_code, 400)

    def test_foreign_opportunity(self):
        foreign = Opportunity.objects.create(user=self.other, title='Not mine')
        response = self.post_json(self.url, {
            'opportunity_id': foreign.id,
            'new_status': 'qualified',
            'new_order': 0,
        })
        self.assertEqual(response.status_code, 404)

    def test_get_not_allowed(self):
        self.assertEqual(self.client.get(self.url).status_code, 405)
