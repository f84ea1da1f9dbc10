from datetime import timedelta
from decimal import Decimal

from django.http import JsonResponse
from django.test import TestCase, Client, RequestFactory, SimpleTestCase
from django.urls import reverse
from django.contrib.auth import get_user_model
from django.utils import timezone

from apps.communications.models import Communication
from apps.contacts.models import Contact
from apps.core.decorators import api_view
from apps.core.exceptions import NotFound, StorageError
from apps.opportunities.models import Opportunity

User = get_user_model()


class ApiViewDecoratorTest(SimpleTestCase):

    def setUp(self):
        self.factory = RequestFactory()

    def test_method_not_allowed(self):
        view = api_view('GET')(lambda request: JsonResponse({}))
        response = view(self.factory.post('/'))
        self.assertEqual(response.status_code, 405)
        self.assertEqual(response['Allow'], 'GET')

    def test_crm_errors_mapped(self):
        def missing(request):
            raise NotFound('Contact not found')

        response = api_view('GET')(missing)(self.factory.get('/'))
        self.assertEqual(response.status_code, 404)
        self.assertJSONEqual(response.content, {'error': 'Contact not found'})

    def test_storage_error_is_500(self):
        def broken(request):
            raise StorageError('Failed to store file')

        with self.assertLogs('apps.core.decorators', level='ERROR'):
            response = api_view('POST')(broken)(self.factory.post('/'))
        self.assertEqual(response.status_code, 500)

    def test_unexpected_error_is_logged_and_hidden(self):
        def crash(request):
            raise RuntimeError('boom')

        with self.assertLogs('apps.core.decorators', level='ERROR'):
            response = api_view('GET')(crash)(self.factory.get('/'))
        self.assertEqual(response.status_code, 500)
        self.assertJSONEqual(response.content, {'error': 'Internal server error'})


class DashboardViewTest(TestCase):

    def setUp(self):
        self.client = Client()
        self.user = User.objects.create_user(email='owner@test.com', password='testpass123')
        other = User.objects.create_user(email='other@test.com', password='testpass123')

        for i in range(7):
            Contact.objects.create(user=self.user, name=f'Contact {i}')
        Contact.objects.create(user=other, name='Not mine')

        Opportunity.objects.create(user=self.user, title='Open', value=Decimal('1000'))
        Opportunity.objects.create(user=self.user, title='Won', value=Decimal('400'), status='closed-won')
        Opportunity.objects.create(user=other, title='Not mine', value=Decimal('99999'))

        now = timezone.now()
        Communication.objects.create(user=self.user, type='meeting', direction='outbound', subject='Soon', scheduled_date=now + timedelta(days=2))
        Communication.objects.create(user=self.user, type='task', direction='outbound', subject='Later', scheduled_date=now + timedelta(days=20))
        Communication.objects.create(user=self.user, type='phone', direction='outbound', subject='Done', scheduled_date=now + timedelta(days=1), completed_date=now)
        Communication.objects.create(user=self.user, type='task', direction='outbound', subject='Late', scheduled_date=now - timedelta(days=1))

        self.client.login(email='owner@test.com', password='testpass123')
        self.url = reverse('core:dashboard')

    def test_requires_login(self):
        self.client.logout()
        self.assertEqual(self.client.get(self.url).status_code, 401)

    def test_metrics(self):
        data = self.client.get(self.url).json()
        metrics = data['metrics']

        self.assertEqual(metrics['total_contacts'], 7)
        self.assertEqual(metrics['total_opportunities'], 2)
        self.assertEqual(metrics['active_opportunities'], 1)
        self.assertEqual(metrics['pipeline_value'], 1000)
        self.assertEqual(metrics['won_value'], 400)
        self.assertEqual(metrics['upcoming_communications'], 1)
        self.assertEqual(metrics['overdue_communications'], 1)

    def test_upcoming_and_recent(self):
        data = self.client.get(self.url).json()
        self.assertEqual([c['subject'] for c in data['upcoming']], ['Soon'])
        self.assertEqual(len(data['recent_contacts']), 5)
        self.assertEqual(len(data['recent_opportunities']), 2)
        self.assertEqual(len(data['communications_last_7_days']), 7)
        self.assertEqual(data['communications_last_7_days'][-1]['count'], 4)
