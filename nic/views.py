import logging

from django.shortcuts import render
from django.utils import timezone
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from .serializers import NicDecodeRequestSerializer, DecodedNicSerializer
from .utils import Rejection, clean_nic_input, is_complete_input, decode, explain, format_birth_date, mask_nic

logger = logging.getLogger(__name__)


class NicDecodeAPIView(APIView):
    """
    Decode a Sri Lankan NIC number into birth date, age and sex.

    GET  /api/nic/decode/?nic=996663272V
    POST /api/nic/decode/  {"nic": "996663272V"}
    """
    permission_classes = [AllowAny]

    def get(self, request):
        return self._decode(request.query_params)

    def post(self, request):
        return self._decode(request.data)

    def _decode(self, data):
        context = {'reference_now': timezone.localdate()}
        serializer = NicDecodeRequestSerializer(data=data, context=context)
        if not serializer.is_valid():
            errors = serializer.errors
            code = errors['nic'][0].code if 'nic' in errors else Rejection.INVALID_FORMAT.value
            raw_nic = data.get('nic') if hasattr(data, 'get') else None
            logger.info(f"Rejected NIC {mask_nic(raw_nic)}: {code}")
            return Response({**errors, 'code': code}, status=status.HTTP_400_BAD_REQUEST)

        nic = serializer.validated_data['nic']
        logger.info(f"Decoded NIC {mask_nic(nic)}")
        output = DecodedNicSerializer(serializer.decoded, context={'nic': nic})
        return Response(output.data)


def analyzer(request):
    """Single page analyzer; HTMX requests only get the result partial."""
    nic = clean_nic_input(request.GET.get('nic', ''))
    data = {'nic': nic}

    if is_complete_input(nic):
        result = decode(nic, timezone.localdate())
        if isinstance(result, Rejection):
            logger.info(f"Rejected NIC {mask_nic(nic)}: {result.value}")
            data['error'] = result.label
        else:
            data['decoded'] = result
            data['birth_date'] = format_birth_date(result.birth_date)
            data['explanation'] = explain(result, nic)

    template = "nic/analyzer.html"
    if request.htmx:
        template = "nic/analyzer-partial.html"
    return render(request, template, data)


@api_view(['GET'])
@permission_classes([AllowAny])
def health(request):
    return Response({'status': 'ok'})
